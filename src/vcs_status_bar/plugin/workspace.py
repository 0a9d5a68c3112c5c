"""
Workspace models reported by the host: tabs and the panes inside them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional


@dataclass(frozen=True)
class TabInfo:
    """A workspace tab; ``active`` marks the focused one."""

    position: int
    name: str = ""
    active: bool = False


@dataclass(frozen=True)
class PaneInfo:
    """A pane within a tab."""

    id: int
    title: str = ""
    is_focused: bool = False
    is_plugin: bool = False


def get_focused_tab(tabs: Iterable[TabInfo]) -> Optional[TabInfo]:
    """Return the first tab marked active, or ``None``."""
    for tab in tabs:
        if tab.active:
            return tab
    return None


def get_focused_pane(tab_position: int, panes: Mapping[int, Iterable[PaneInfo]]) -> Optional[PaneInfo]:
    """Return the focused terminal pane of the tab at ``tab_position``.

    Plugin panes (such as this widget) are skipped.
    """
    for pane in panes.get(tab_position, ()):
        if pane.is_focused and not pane.is_plugin:
            return pane
    return None
