"""
Command line interface for the vcs_status_bar tool.

This module defines the ``main`` function which is used as the entry
point when executing the ``vcsbar`` command. It loads the configuration,
checks that the target directory is a working copy of the chosen VCS,
and runs the branch widget on a :class:`LocalHost`, printing one status
line per render.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click

from vcs_status_bar import __version__
from vcs_status_bar.config.loader import ConfigError, load_config, to_configuration
from vcs_status_bar.host.local import LocalHost, run_plugin
from vcs_status_bar.plugin.status_plugin import BranchStatusPlugin, OutputDecodeError
from vcs_status_bar.vcs.selector import BACKENDS, DEFAULT_VCS_TYPE

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_CONFIG_ERROR = 5
EXIT_DECODE_ERROR = 6


def print_warning(message: str) -> None:
    """Print a warning message."""
    click.echo(f"⚠ {message}", err=True)


def print_error(message: str) -> None:
    """Print an error message."""
    click.echo(f"✗ {message}", err=True)


def warn_if_not_working_copy(vcs_type: Optional[str], directory: Path) -> None:
    """Warn when ``directory`` is outside a working copy of ``vcs_type``.

    Unknown VCS types are left for the widget to reject.
    """
    backend = BACKENDS.get(DEFAULT_VCS_TYPE if vcs_type is None else vcs_type)
    if backend is None:
        return
    root = backend.find_working_copy(directory)
    if root is None:
        print_warning(f"{directory} is not inside a {backend.name} working copy; no branch will be found.")
    else:
        logger.debug("Found %s working copy at: %s", backend.name, root)


@click.command()
@click.option("--vcs-type", "vcs_type", help="Version control system to query (git or svn).")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Configuration file (default: ~/.config/vcs_status_bar/config.json).",
)
@click.option("--initial-delay", type=float, help="Seconds before the first query.")
@click.option("--poll-interval", type=float, help="Seconds between queries.")
@click.option("--track-dirty/--no-track-dirty", default=None, help="Also show uncommitted changes.")
@click.option(
    "--directory",
    type=click.Path(path_type=Path, file_okay=False, exists=True),
    help="Directory to query (default: current directory).",
)
@click.option("--once", is_flag=True, help="Print the first status line and exit.")
@click.option("--timeout", type=float, default=10.0, show_default=True, help="With --once, seconds to wait for a branch.")
@click.option("--verbose", is_flag=True, help="Enable verbose (debug) output.")
@click.version_option(version=__version__, prog_name="vcsbar")
def main(
    vcs_type: Optional[str],
    config_path: Optional[Path],
    initial_delay: Optional[float],
    poll_interval: Optional[float],
    track_dirty: Optional[bool],
    directory: Optional[Path],
    once: bool,
    timeout: float,
    verbose: bool,
) -> None:
    """Show the current git or svn branch as a status line."""
    # force=True so repeated invocations (tests) reconfigure handlers
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    try:
        settings: Dict[str, Any] = dict(load_config(config_path))
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
        raise click.exceptions.Exit(EXIT_CONFIG_ERROR)

    overrides = {
        "vcs_type": vcs_type,
        "initial_delay": initial_delay,
        "poll_interval": poll_interval,
        "track_dirty": track_dirty,
    }
    settings.update({key: value for key, value in overrides.items() if value is not None})
    configuration = to_configuration(settings)
    logger.debug("Plugin configuration: %s", configuration)

    directory = directory or Path.cwd()
    warn_if_not_working_copy(configuration.get("vcs_type"), directory)

    host = LocalHost(cwd=directory)
    plugin = BranchStatusPlugin(host)
    try:
        run_plugin(
            plugin,
            host,
            configuration,
            max_renders=1 if once else None,
            timeout=timeout if once else None,
        )
    except ConfigError as exc:
        print_error(f"Configuration error: {exc}")
        raise click.exceptions.Exit(EXIT_CONFIG_ERROR)
    except OutputDecodeError as exc:
        logger.exception("Branch widget stopped: %s", exc)
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_DECODE_ERROR)
    except KeyboardInterrupt:
        raise click.exceptions.Exit(EXIT_SUCCESS)
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
