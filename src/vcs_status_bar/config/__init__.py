"""
Configuration handling for vcs_status_bar.

Provides the loader for the optional JSON configuration file and the
parser for the string-valued option mapping handed to the plugin at load
time. See :mod:`vcs_status_bar.config.loader` and
:mod:`vcs_status_bar.config.options` for implementation details.
"""

from .loader import ConfigError, load_config, to_configuration  # noqa: F401
from .options import PluginOptions  # noqa: F401
