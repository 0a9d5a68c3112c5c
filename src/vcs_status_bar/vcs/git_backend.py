"""
Git backend for vcs_status_bar.

``git branch`` lists local branches and marks the checked-out one with a
leading ``* ``. ``git status --porcelain`` prints one line per changed
path and nothing at all for a clean tree; unlike plain ``git status`` its
output does not depend on the locale or the git version. Untracked files
do not make a tree dirty.
"""

from __future__ import annotations

import re

from .backend import VcsBackend


GIT_QUERY_CMD = ("git", "branch")
GIT_BRANCH_REGEX = re.compile(r"^\* (?P<branch>[a-zA-Z0-9_-]+)", re.MULTILINE)

GIT_DIRTY_CMD = ("git", "status", "--porcelain", "--untracked-files=no")
# Clean means no output besides whitespace
GIT_CLEAN_REGEX = re.compile(r"\A\s*\Z")


GIT_BACKEND = VcsBackend(
    name="git",
    query_command=GIT_QUERY_CMD,
    branch_pattern=GIT_BRANCH_REGEX,
    metadata_dir=".git",
    dirty_command=GIT_DIRTY_CMD,
    dirty_pattern=GIT_CLEAN_REGEX,
)
