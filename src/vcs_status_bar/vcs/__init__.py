"""
Version control system (VCS) backends.

This package contains the closed set of backends the status widget can
query, Git and Subversion (SVN). Each backend describes the command to
run and the patterns used to read the current branch (and, for Git, the
clean/dirty state) out of that command's output.
"""

from .backend import VcsBackend  # noqa: F401
from .git_backend import GIT_BACKEND  # noqa: F401
from .selector import BACKENDS, select_backend  # noqa: F401
from .svn_backend import SVN_BACKEND  # noqa: F401
