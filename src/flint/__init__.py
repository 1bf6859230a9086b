"""Flint - plugin-driven generator for project tooling configuration.

Flint reads a project's ``flint.toml``, activates every installed plugin that
has a section there, and lets each plugin validate its slice of the
configuration and generate the config files it owns.

Key modules:

- :mod:`flint.plugins` - Plugin discovery, registry and sandboxed execution
- :mod:`flint.engine` - Concurrent generation across all active plugins
- :mod:`flint.logs` - Shared, append-only log consumed by the CLI
- :mod:`flint.config` - ``flint.toml`` models, loading and plugin paths
"""

__version__ = "0.1.0"
