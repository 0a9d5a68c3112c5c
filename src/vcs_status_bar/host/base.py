"""
Capabilities a host offers to the branch widget.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol, Sequence

from vcs_status_bar.plugin.events import EventType, PermissionType


class Host(Protocol):
    """What a widget may ask of the host it runs in.

    Every call returns immediately. Results of ``run_command`` and
    ``set_timeout`` come back later as events.
    """

    def subscribe(self, event_types: Iterable[EventType]) -> None:
        ...

    def request_permission(self, permissions: Iterable[PermissionType]) -> None:
        ...

    def set_selectable(self, selectable: bool) -> None:
        ...

    def set_timeout(self, seconds: float) -> None:
        ...

    def run_command(self, command: Sequence[str], context: Mapping[str, str]) -> None:
        ...

    def print_text(self, text: str) -> None:
        ...
