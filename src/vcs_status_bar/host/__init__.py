"""
Hosts that run the branch widget.

:class:`~vcs_status_bar.host.base.Host` describes the capabilities the
widget needs from whatever embeds it. :class:`LocalHost` provides them in
a plain terminal, and :func:`run_plugin` is its dispatch loop.
"""

from .base import Host  # noqa: F401
from .local import LocalHost, run_plugin  # noqa: F401
