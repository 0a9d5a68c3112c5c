"""
Backend descriptor shared by the Git and SVN implementations.

A :class:`VcsBackend` is immutable: it is chosen once when the widget
loads and handed to the plugin state. Parsing is pure text matching; the
backend never spawns processes itself.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


BRANCH_GROUP = "branch"


@dataclass(frozen=True)
class VcsBackend:
    """Description of one version control backend.

    Attributes
    ----------
    name : str
        Backend identifier, ``"git"`` or ``"svn"``.
    query_command : Tuple[str, ...]
        Program followed by its arguments; never empty.
    branch_pattern : re.Pattern[str]
        Regex with exactly one named group ``branch``.
    metadata_dir : str
        Name of the directory marking a working copy root (``.git``).
    dirty_command : Optional[Tuple[str, ...]]
        Command whose output ``dirty_pattern`` is matched against.
    dirty_pattern : Optional[re.Pattern[str]]
        Regex whose match means the working tree is clean.
    """

    name: str
    query_command: Tuple[str, ...]
    branch_pattern: re.Pattern[str]
    metadata_dir: str
    dirty_command: Optional[Tuple[str, ...]] = None
    dirty_pattern: Optional[re.Pattern[str]] = None

    def __post_init__(self) -> None:
        if not self.query_command:
            raise ValueError(f"{self.name}: query command must not be empty")
        if self.branch_pattern.groups != 1 or BRANCH_GROUP not in self.branch_pattern.groupindex:
            raise ValueError(
                f"{self.name}: branch pattern needs exactly one group named '{BRANCH_GROUP}'"
            )
        if (self.dirty_command is None) != (self.dirty_pattern is None):
            raise ValueError(f"{self.name}: dirty command and pattern go together")

    @property
    def tracks_dirty(self) -> bool:
        """Return True if this backend can tell clean from dirty trees."""
        return self.dirty_pattern is not None

    def parse_branch(self, output: str) -> Optional[str]:
        """Extract the branch name from decoded query output.

        Returns ``None`` when no line matches, e.g. outside a working copy
        or on a detached HEAD.
        """
        match = self.branch_pattern.search(output)
        if match is None:
            logger.debug("%s: no branch found in query output", self.name)
            return None
        return match.group(BRANCH_GROUP)

    def is_clean(self, output: str) -> Optional[bool]:
        """Return whether ``output`` of the dirty command reports a clean tree.

        ``None`` means the backend has no dirty pattern.
        """
        if self.dirty_pattern is None:
            return None
        return self.dirty_pattern.search(output) is not None

    def find_working_copy(self, start: Path) -> Optional[Path]:
        """Find the root of the working copy containing ``start``.

        Walk upwards until the backend's metadata directory is found or
        the filesystem root is reached.
        """
        current = start.resolve()
        while True:
            if (current / self.metadata_dir).exists():
                return current
            if current.parent == current:
                return None
            current = current.parent
