"""
Standalone host for running the branch widget in a plain terminal.

Commands run with :mod:`subprocess` on short-lived worker threads and
timers fire on :class:`threading.Timer` threads. Neither touches the
widget: both post events to a queue, and :func:`run_plugin` hands those
events to the widget one at a time on the calling thread.
"""

from __future__ import annotations

import logging
import queue
import subprocess
import threading
import time
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional, Sequence, Set

import click

from vcs_status_bar.plugin.events import (
    CommandFinished,
    Event,
    EventType,
    PermissionType,
    TimerElapsed,
)
from vcs_status_bar.plugin.status_plugin import BranchStatusPlugin


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class LocalHost:
    """Host backed by local processes, threads and a terminal.

    Parameters
    ----------
    cwd : Optional[Path]
        Directory commands run in; the current directory when omitted.
    echo : Callable[[str], None]
        Where rendered lines go. Defaults to :func:`click.echo`.
    """

    def __init__(self, cwd: Optional[Path] = None, echo: Callable[[str], None] = click.echo) -> None:
        self.cwd = cwd
        self._echo = echo
        self._events: "queue.Queue[Event]" = queue.Queue()
        self._timers: List[threading.Timer] = []
        self._lock = threading.Lock()
        self._closed = False
        self.subscriptions: Set[EventType] = set()
        self.permissions: Set[PermissionType] = set()
        self.selectable = True

    # ------------------------------------------------------------------
    # Host capabilities
    # ------------------------------------------------------------------
    def subscribe(self, event_types: Iterable[EventType]) -> None:
        self.subscriptions.update(event_types)

    def request_permission(self, permissions: Iterable[PermissionType]) -> None:
        # Nothing to negotiate locally: every request is granted.
        granted = set(permissions)
        self.permissions.update(granted)
        logger.debug("Granted permissions: %s", ", ".join(sorted(p.value for p in granted)))

    def set_selectable(self, selectable: bool) -> None:
        self.selectable = selectable

    def set_timeout(self, seconds: float) -> None:
        timer = threading.Timer(seconds, self.post, args=(TimerElapsed(seconds),))
        timer.daemon = True
        with self._lock:
            if self._closed:
                return
            self._timers = [t for t in self._timers if t.is_alive()]
            self._timers.append(timer)
        timer.start()

    def run_command(self, command: Sequence[str], context: Mapping[str, str]) -> None:
        """Start ``command`` in the background.

        Raises
        ------
        PermissionError
            If the widget never requested permission to run commands.
        """
        if PermissionType.RUN_COMMANDS not in self.permissions:
            raise PermissionError("run_commands permission was not requested")
        worker = threading.Thread(
            target=self._execute,
            args=(tuple(command), dict(context)),
            name=f"run-{command[0]}",
            daemon=True,
        )
        worker.start()

    def print_text(self, text: str) -> None:
        self._echo(text)

    # ------------------------------------------------------------------
    # Event queue
    # ------------------------------------------------------------------
    def _execute(self, command: Sequence[str], context: Mapping[str, str]) -> None:
        logger.debug("Executing command: %s", " ".join(command))
        try:
            result = subprocess.run(
                list(command),
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            # e.g. the VCS executable is not on PATH
            logger.error("Failed to run %s: %s", command[0], exc)
            self.post(CommandFinished(None, b"", str(exc).encode("utf-8"), dict(context)))
            return

        if result.returncode != 0:
            logger.debug(
                "Command exited with %s: %s\nSTDERR: %s",
                result.returncode,
                " ".join(command),
                result.stderr.decode("utf-8", errors="replace").strip(),
            )
        self.post(CommandFinished(result.returncode, result.stdout, result.stderr, dict(context)))

    def post(self, event: Event) -> None:
        """Queue ``event`` for delivery; dropped once the host is closed."""
        if self._closed:
            return
        self._events.put(event)

    def next_event(self, timeout: Optional[float] = None) -> Optional[Event]:
        """Return the next queued event, or ``None`` after ``timeout`` seconds."""
        try:
            return self._events.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        """Cancel pending timers and stop accepting events."""
        with self._lock:
            self._closed = True
            timers, self._timers = self._timers, []
        for timer in timers:
            timer.cancel()


def run_plugin(
    plugin: BranchStatusPlugin,
    host: LocalHost,
    configuration: Mapping[str, str],
    max_renders: Optional[int] = None,
    timeout: Optional[float] = None,
    rows: int = 1,
    cols: int = 80,
) -> int:
    """Load ``plugin`` and dispatch events to it until done.

    Parameters
    ----------
    max_renders : Optional[int]
        Stop after this many rendered lines; run forever when ``None``.
    timeout : Optional[float]
        Give up after this many seconds, rendering the current state one
        last time (the fallback line if no branch was found).

    Returns
    -------
    int
        Number of lines rendered.

    Raises
    ------
    ConfigError
        From ``plugin.load``.
    OutputDecodeError
        If a command's output cannot be decoded.
    """
    plugin.load(configuration)
    deadline = None if timeout is None else time.monotonic() + timeout
    renders = 0
    try:
        while max_renders is None or renders < max_renders:
            remaining = None if deadline is None else deadline - time.monotonic()
            event = None if remaining is not None and remaining <= 0 else host.next_event(remaining)
            if event is None:
                logger.debug("Timed out after %.1fs waiting for a branch", timeout)
                plugin.render(rows, cols)
                renders += 1
                break
            if event.event_type not in host.subscriptions:
                continue
            if plugin.update(event):
                plugin.render(rows, cols)
                renders += 1
    finally:
        host.close()
    return renders
