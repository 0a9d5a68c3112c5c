#!/usr/bin/env python
"""
Thin wrapper script to invoke the vcs_status_bar CLI.

Running ``python vcsbar.py`` is equivalent to running the ``vcsbar``
console script installed via ``pyproject.toml``.
"""

from vcs_status_bar.cli import main


if __name__ == "__main__":
    main(prog_name="vcsbar")
