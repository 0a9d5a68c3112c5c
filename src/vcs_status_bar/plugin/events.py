"""
Events delivered by the host to the branch widget.

Every event is a small frozen dataclass tagged with the
:class:`EventType` a plugin subscribes to. The plugin's single
``update`` entry point accepts any of them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Union

from .workspace import PaneInfo, TabInfo


class EventType(enum.Enum):
    """Event classes a plugin can subscribe to."""

    COMMAND_RESULT = "command_result"
    TIMER = "timer"
    PANE_UPDATE = "pane_update"
    TAB_UPDATE = "tab_update"


class PermissionType(enum.Enum):
    """Capabilities a plugin asks the host for."""

    RUN_COMMANDS = "run_commands"
    READ_APPLICATION_STATE = "read_application_state"


@dataclass(frozen=True)
class TimerElapsed:
    """A timer armed with ``set_timeout`` fired after ``elapsed`` seconds."""

    elapsed: float
    event_type: ClassVar[EventType] = EventType.TIMER


@dataclass(frozen=True)
class CommandFinished:
    """A command started with ``run_command`` exited.

    ``exit_code`` is ``None`` when the command could not be started at
    all. ``context`` is the mapping passed to ``run_command``.
    """

    exit_code: Optional[int]
    stdout: bytes
    stderr: bytes
    context: Dict[str, str] = field(default_factory=dict)
    event_type: ClassVar[EventType] = EventType.COMMAND_RESULT


@dataclass(frozen=True)
class TabsUpdated:
    """The set of open tabs (with focus markers) changed."""

    tabs: List[TabInfo]
    event_type: ClassVar[EventType] = EventType.TAB_UPDATE


@dataclass(frozen=True)
class PanesUpdated:
    """Pane layout changed; ``panes`` maps tab position to its panes."""

    panes: Dict[int, List[PaneInfo]]
    event_type: ClassVar[EventType] = EventType.PANE_UPDATE


@dataclass(frozen=True)
class PipeMessage:
    """A message sent to the plugin from a keybinding, the CLI or a plugin.

    Pipe messages bypass subscriptions and go to ``pipe`` instead of
    ``update``.
    """

    name: str
    payload: Optional[str] = None
    source: str = "cli"


Event = Union[TimerElapsed, CommandFinished, TabsUpdated, PanesUpdated]
