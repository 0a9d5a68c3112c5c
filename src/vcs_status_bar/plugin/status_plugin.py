"""
Branch widget implementation for vcs_status_bar.

The widget is driven entirely by events: a timer triggers a VCS query
through the host, the query's output arrives later as a
:class:`CommandFinished` event and is parsed with the active backend's
pattern, and focus events keep track of the focused tab and pane.
``render`` turns the current state into a single status line.

All entry points run one at a time on the host's dispatch loop and never
block, so the same calls can be made directly from tests with a host that
only records what it is asked to do.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping, Optional

from vcs_status_bar.config.options import PluginOptions
from vcs_status_bar.vcs.selector import select_backend

from .events import (
    CommandFinished,
    Event,
    EventType,
    PanesUpdated,
    PermissionType,
    PipeMessage,
    TabsUpdated,
    TimerElapsed,
)
from .state import BRANCH_QUERY, DIRTY_QUERY, PluginState, PluginStatus, QueryPhase
from .workspace import get_focused_pane, get_focused_tab

if TYPE_CHECKING:
    from vcs_status_bar.host.base import Host


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


BRANCH_GLYPH = "\ue0a0"
DIRTY_MARKER = "*"
FALLBACK_TEXT = "Failed to get branch, check logs!"

# Key in the run_command context naming which query a result belongs to
QUERY_CONTEXT_KEY = "query"

SUBSCRIPTIONS = (
    EventType.COMMAND_RESULT,
    EventType.TIMER,
    EventType.PANE_UPDATE,
    EventType.TAB_UPDATE,
)
PERMISSIONS = (
    PermissionType.RUN_COMMANDS,
    PermissionType.READ_APPLICATION_STATE,
)


class OutputDecodeError(Exception):
    """Raised when a VCS command's output is not valid UTF-8 text."""

    pass


def decode_output(stdout: bytes) -> str:
    """Decode captured standard output.

    Raises
    ------
    OutputDecodeError
        If ``stdout`` is not valid UTF-8. The widget does not try to
        recover from this.
    """
    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.error("Undecodable command output: %s", exc)
        raise OutputDecodeError(f"Command output is not valid UTF-8: {exc}") from exc


def format_status(branch: Optional[str], is_dirty: bool = False) -> str:
    """Format the status line for ``branch``.

    Examples
    --------
    >>> format_status("main")
    '\\ue0a0 main'
    >>> format_status("main", is_dirty=True)
    '\\ue0a0 main*'
    >>> format_status(None)
    'Failed to get branch, check logs!'
    """
    if branch is None:
        return FALLBACK_TEXT
    text = f"{BRANCH_GLYPH} {branch}"
    if is_dirty:
        text += DIRTY_MARKER
    return text


class BranchStatusPlugin:
    """Status-bar widget showing the current branch of a working copy."""

    def __init__(self, host: "Host") -> None:
        self.host = host
        self.options: Optional[PluginOptions] = None
        self.state: Optional[PluginState] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def status(self) -> PluginStatus:
        if self.state is None:
            return PluginStatus.UNINITIALIZED
        if self.state.current_branch is None:
            return PluginStatus.AWAITING_FIRST_RESULT
        return PluginStatus.HAS_BRANCH

    def load(self, configuration: Mapping[str, str]) -> None:
        """Select the backend and register with the host.

        Raises
        ------
        ConfigError
            If the configuration names an unknown VCS type or carries an
            invalid option.
        RuntimeError
            If the plugin was already loaded.
        """
        if self.state is not None:
            raise RuntimeError("plugin is already loaded")

        options = PluginOptions.from_configuration(configuration)
        backend = select_backend(options.vcs_type)
        self.options = options
        self.state = PluginState(active_backend=backend)

        self.host.set_selectable(False)
        self.host.request_permission(PERMISSIONS)
        self.host.subscribe(SUBSCRIPTIONS)
        self.host.set_timeout(options.initial_delay)
        logger.info(
            "Loaded %s branch widget (first query in %.1fs, then every %.1fs)",
            backend.name,
            options.initial_delay,
            options.poll_interval,
        )

    def _require_state(self) -> PluginState:
        if self.state is None:
            raise RuntimeError("plugin has not been loaded")
        return self.state

    # ------------------------------------------------------------------
    # Event dispatch
    # ------------------------------------------------------------------
    def update(self, event: Event) -> bool:
        """Apply ``event`` to the state.

        Returns
        -------
        bool
            True if the widget should be re-rendered.
        """
        state = self._require_state()
        if isinstance(event, TimerElapsed):
            return self._on_timer(state)
        if isinstance(event, CommandFinished):
            return self._on_command_finished(state, event)
        if isinstance(event, TabsUpdated):
            return self._on_tabs_updated(state, event)
        if isinstance(event, PanesUpdated):
            return self._on_panes_updated(state, event)
        logger.debug("Ignoring unhandled event: %r", event)
        return False

    def pipe(self, message: PipeMessage) -> bool:
        """Handle a pipe message. Nothing is listening on the pipe yet."""
        self._require_state()
        logger.debug("Ignoring pipe message %r from %s", message.name, message.source)
        return False

    def _on_timer(self, state: PluginState) -> bool:
        assert self.options is not None
        self.host.set_timeout(self.options.poll_interval)

        if state.query_phase is QueryPhase.IN_FLIGHT:
            logger.debug("Previous query still running (%s), skipping this tick",
                         ", ".join(sorted(state.pending_queries)))
            return False

        backend = state.active_backend
        kinds = [BRANCH_QUERY]
        if self.options.track_dirty and backend.tracks_dirty:
            kinds.append(DIRTY_QUERY)
        state.begin_queries(kinds)

        logger.debug("Querying branch: %s", " ".join(backend.query_command))
        self.host.run_command(backend.query_command, {QUERY_CONTEXT_KEY: BRANCH_QUERY})
        if DIRTY_QUERY in kinds:
            assert backend.dirty_command is not None
            logger.debug("Querying dirty state: %s", " ".join(backend.dirty_command))
            self.host.run_command(backend.dirty_command, {QUERY_CONTEXT_KEY: DIRTY_QUERY})
        return False

    def _on_command_finished(self, state: PluginState, event: CommandFinished) -> bool:
        kind = event.context.get(QUERY_CONTEXT_KEY, BRANCH_QUERY)
        state.finish_query(kind)
        if kind == BRANCH_QUERY:
            return self._apply_branch_result(state, event)
        if kind == DIRTY_QUERY:
            return self._apply_dirty_result(state, event)
        logger.warning("Ignoring result of unknown query %r", kind)
        return False

    def _apply_branch_result(self, state: PluginState, event: CommandFinished) -> bool:
        # Only stdout matters; a failed command simply produces no match.
        output = decode_output(event.stdout)
        branch = state.active_backend.parse_branch(output)
        if branch is None:
            logger.debug(
                "No branch in output of %s (exit code %s), keeping %r",
                state.active_backend.name,
                event.exit_code,
                state.current_branch,
            )
            return False
        if branch != state.current_branch:
            logger.debug("Branch changed: %r -> %r", state.current_branch, branch)
        state.current_branch = branch
        return True

    def _apply_dirty_result(self, state: PluginState, event: CommandFinished) -> bool:
        if event.exit_code != 0:
            logger.debug("Dirty query failed (exit code %s), keeping dirty=%s",
                         event.exit_code, state.is_dirty)
            return False
        clean = state.active_backend.is_clean(decode_output(event.stdout))
        if clean is None:
            return False
        changed = state.is_dirty == clean
        state.is_dirty = not clean
        return changed and state.current_branch is not None

    def _on_tabs_updated(self, state: PluginState, event: TabsUpdated) -> bool:
        focused = get_focused_tab(event.tabs)
        if focused is None:
            return False
        if focused.position != state.focused_tab_position:
            logger.debug("Focused tab: %s -> %s", state.focused_tab_position, focused.position)
        state.focused_tab_position = focused.position
        return False

    def _on_panes_updated(self, state: PluginState, event: PanesUpdated) -> bool:
        # Stored for diagnostics only; rendering does not depend on the pane.
        state.focused_pane = get_focused_pane(state.focused_tab_position, event.panes)
        logger.debug("Focused pane in tab %s: %r", state.focused_tab_position, state.focused_pane)
        return False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self, rows: int, cols: int) -> str:
        """Print the status line through the host and return it.

        ``rows`` and ``cols`` are accepted for the host's calling
        convention; the output is always one line.
        """
        if self.state is None:
            text = FALLBACK_TEXT
        else:
            text = format_status(self.state.current_branch, self.state.is_dirty)
        self.host.print_text(text)
        return text
