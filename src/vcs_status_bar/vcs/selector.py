"""
Backend selection from the ``vcs_type`` configuration value.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from vcs_status_bar.config.loader import ConfigError

from .backend import VcsBackend
from .git_backend import GIT_BACKEND
from .svn_backend import SVN_BACKEND


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_VCS_TYPE = "git"

BACKENDS: Dict[str, VcsBackend] = {
    GIT_BACKEND.name: GIT_BACKEND,
    SVN_BACKEND.name: SVN_BACKEND,
}


def select_backend(vcs_type: Optional[str] = None) -> VcsBackend:
    """Return the backend named by ``vcs_type``.

    Parameters
    ----------
    vcs_type : Optional[str]
        ``"git"``, ``"svn"`` or ``None`` (meaning git).

    Returns
    -------
    VcsBackend
        The matching backend descriptor.

    Raises
    ------
    ConfigError
        If ``vcs_type`` names an unknown backend. The widget cannot run
        without a backend, so callers treat this as fatal.
    """
    name = DEFAULT_VCS_TYPE if vcs_type is None else vcs_type
    try:
        backend = BACKENDS[name]
    except KeyError:
        logger.error("Invalid vcs_type: %r", vcs_type)
        raise ConfigError(
            f"Invalid vcs_type {vcs_type!r}; expected one of: {', '.join(BACKENDS)}"
        ) from None
    logger.debug("Selected %s backend", backend.name)
    return backend
