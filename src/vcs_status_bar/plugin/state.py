"""
Mutable state owned by one running branch widget.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable, Optional, Set

from vcs_status_bar.vcs.backend import VcsBackend

from .workspace import PaneInfo


# Tab positions are zero-based; before any tab update the first tab is assumed
FIRST_TAB_POSITION = 0

BRANCH_QUERY = "branch"
DIRTY_QUERY = "dirty"


class QueryPhase(enum.Enum):
    """Whether a round of VCS queries is waiting for results."""

    IDLE = "idle"
    IN_FLIGHT = "in_flight"


class PluginStatus(enum.Enum):
    """Coarse lifecycle of the widget."""

    UNINITIALIZED = "uninitialized"
    AWAITING_FIRST_RESULT = "awaiting_first_result"
    HAS_BRANCH = "has_branch"


@dataclass
class PluginState:
    """State of the branch widget.

    Attributes
    ----------
    active_backend : VcsBackend
        Backend chosen at load; never replaced.
    current_branch : Optional[str]
        Last branch parsed successfully. Once set it is only ever
        replaced by another branch name, never cleared.
    is_dirty : bool
        Whether the working tree has uncommitted changes.
    focused_tab_position : int
        Position of the tab the host last reported as focused.
    focused_pane : Optional[PaneInfo]
        Focused pane of that tab, kept for diagnostics.
    query_phase : QueryPhase
        ``IN_FLIGHT`` while any query of the current round is pending.
    pending_queries : Set[str]
        Query kinds still waiting for a result.
    """

    active_backend: VcsBackend
    current_branch: Optional[str] = None
    is_dirty: bool = False
    focused_tab_position: int = FIRST_TAB_POSITION
    focused_pane: Optional[PaneInfo] = None
    query_phase: QueryPhase = QueryPhase.IDLE
    pending_queries: Set[str] = field(default_factory=set)

    def begin_queries(self, kinds: Iterable[str]) -> None:
        self.pending_queries = set(kinds)
        if self.pending_queries:
            self.query_phase = QueryPhase.IN_FLIGHT

    def finish_query(self, kind: str) -> None:
        self.pending_queries.discard(kind)
        if not self.pending_queries:
            self.query_phase = QueryPhase.IDLE
