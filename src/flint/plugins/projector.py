"""Build the configuration view handed to a plugin."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from flint.plugins.errors import MissingPluginConfigError

if TYPE_CHECKING:
    from flint.config.schema import ProjectConfig

COMMON_KEY = "common"


def project_config(config: ProjectConfig, plugin_id: str) -> dict[str, Any]:
    """Return the plugin's own section with the shared ``common`` table nested in.

    The result is a deep copy, so a plugin mutating its view cannot affect
    the project config or any other task.

    Raises:
        MissingPluginConfigError: If there is no section for ``plugin_id``
    """
    section = config.section(plugin_id)
    if section is None:
        raise MissingPluginConfigError(plugin_id)

    view = copy.deepcopy(section)
    view[COMMON_KEY] = copy.deepcopy(config.common)
    return view
