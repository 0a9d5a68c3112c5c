"""
Subversion (SVN) backend for vcs_status_bar.

SVN branches are directories; by convention a working branch lives under
``branches/`` in the repository, so the branch name is the path segment
following ``branches/`` on the ``URL:`` line of ``svn info``. Working
copies on trunk or tags therefore show no branch.
"""

from __future__ import annotations

import re

from .backend import VcsBackend


SVN_QUERY_CMD = ("svn", "info")
SVN_BRANCH_REGEX = re.compile(r"^URL:.+branches/(?P<branch>[a-zA-Z0-9_-]+)", re.MULTILINE)


# svn has no cheap clean/dirty check that fits a single pattern
SVN_BACKEND = VcsBackend(
    name="svn",
    query_command=SVN_QUERY_CMD,
    branch_pattern=SVN_BRANCH_REGEX,
    metadata_dir=".svn",
)
