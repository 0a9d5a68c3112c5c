"""
Top-level package for vcs_status_bar.

This package exposes the branch widget via
``vcs_status_bar.plugin`` and the main CLI entry point via the
``vcs_status_bar.cli`` module.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
