"""
The branch widget: event-driven polling, parsing and rendering.

:class:`BranchStatusPlugin` owns a :class:`PluginState` and reacts to the
events defined in :mod:`vcs_status_bar.plugin.events`.
"""

from .events import (  # noqa: F401
    CommandFinished,
    Event,
    EventType,
    PanesUpdated,
    PermissionType,
    PipeMessage,
    TabsUpdated,
    TimerElapsed,
)
from .state import PluginState, PluginStatus, QueryPhase  # noqa: F401
from .status_plugin import BranchStatusPlugin, OutputDecodeError, format_status  # noqa: F401
from .workspace import PaneInfo, TabInfo  # noqa: F401
