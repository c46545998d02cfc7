from __future__ import annotations

import functools

import click
from click_option_group import optgroup
from loguru import logger
from rich.console import Console
from rich.table import Table

from grabberconf.applier import apply_profile
from grabberconf.device import EGrabberDevice, MockGrabber, list_cameras
from grabberconf.profiles import load_profile, load_script
from grabberconf.types import GrabberConfigError, ensure_valid_profile
from grabberconf.util import (
    DEFAULT_GRABBER_INDEX,
    DEFAULT_LOGLEVEL,
    DEFAULT_PROFILE,
    shutdown_log,
    start_log,
)


def print_tree(cmd, prefix="", parent_ctx=None):
    """Print command tree starting from given command."""
    ctx = click.Context(cmd, info_name=cmd.name, parent=parent_ctx)

    # Only print root name if no parent
    if not parent_ctx:
        click.echo(cmd.name)

    for sub in sorted(cmd.list_commands(ctx)):
        sub_cmd = cmd.get_command(ctx, sub)
        click.echo(f"{prefix}└── {sub}")
        if isinstance(sub_cmd, click.Group):
            print_tree(sub_cmd, prefix + "    ", ctx)


def tree_option(f):
    """Add --tree option to command."""

    def callback(ctx, param, value):
        if not value or ctx.resilient_parsing:
            return
        print_tree(ctx.command)
        ctx.exit()

    return click.option(
        "--tree",
        is_flag=True,
        help="Show command tree from this point",
        expose_value=False,
        is_eager=True,
        callback=callback,
    )(f)


def logging_options(f):
    """Add logging options to a command and run it inside a started log."""

    @optgroup.group("Logging")
    @optgroup.option(
        "--log-to-file/--no-log-to-file",
        "-ltf/",
        default=True,
        help="Enable/disable logging to file (default: enabled)",
    )
    @optgroup.option(
        "--log-to-stdout/--no-log-to-stdout",
        "-lts/",
        default=False,
        help="Enable/disable console logging (default: disabled)",
    )
    @optgroup.option(
        "--log-path",
        "-lp",
        default="",
        help="Custom path for log file (default: ~/.grabberconf/grabberconf.log)",
    )
    @optgroup.option(
        "--log-level",
        "-ll",
        default=DEFAULT_LOGLEVEL,
        help="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR) (default: INFO)",
    )
    @functools.wraps(f)
    def wrapper(*args, log_to_file, log_to_stdout, log_path, log_level, **kwargs):
        start_log(
            log_to_file=log_to_file,
            log_to_stdout=log_to_stdout,
            log_path=log_path,
            log_level=log_level.upper(),
        )
        try:
            return f(*args, **kwargs)
        finally:
            shutdown_log()

    return wrapper


@click.group()
@tree_option
def cli():
    """grabberconf - camera configuration profiles for Euresys frame grabbers.

    Applies ordered register/command profiles (trigger lines, strobe output,
    sensor geometry, exposure and cycle timing) to a grabber, and manages the
    profiles themselves.
    """
    pass


@cli.command()
@click.argument("profile_name", required=False, default=DEFAULT_PROFILE)
@click.option(
    "--script",
    "-s",
    "script_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Apply an eGrabber .js script instead of a named profile",
)
@optgroup.group("Device")
@optgroup.option(
    "--index",
    "-i",
    type=int,
    default=DEFAULT_GRABBER_INDEX,
    help="Camera index among the discovered cameras (default: 0)",
)
@optgroup.option(
    "--mock", is_flag=True, default=False, help="Apply to a mock grabber"
)
@optgroup.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show the operations without touching any device",
)
@logging_options
def apply(profile_name, script_path, index, mock, dry_run):
    """Apply a profile to a camera.

    Stops acquisition, writes every setting of the profile in order and
    restarts acquisition. Stops at the first setting the camera rejects,
    leaving the settings written so far in place.
    """
    try:
        if script_path:
            profile = load_script(script_path)
        else:
            profile = load_profile(profile_name)
        # rejected before any device is opened
        ensure_valid_profile(profile)
    except GrabberConfigError as e:
        raise click.ClickException(str(e))

    if dry_run:
        report = apply_profile(None, profile, dry_run=True)
        for i, op in enumerate(report.applied, start=1):
            click.echo(f"[{i:02d}] {op}")
        return

    grabber = MockGrabber() if mock else EGrabberDevice(camera_index=index)
    ok, msg = grabber.open()
    if not ok:
        raise click.ClickException(msg)
    try:
        report = apply_profile(grabber, profile)
    except GrabberConfigError as e:
        logger.exception("Profile application failed.")
        raise click.ClickException(str(e))
    finally:
        grabber.close()

    click.echo(
        f"Applied profile '{report.profile_name}': {report.n_applied} operations"
    )


@cli.command()
def discover():
    """List the cameras connected to the frame grabbers."""
    try:
        cameras = list_cameras()
    except GrabberConfigError as e:
        raise click.ClickException(str(e))

    if not cameras:
        click.echo("No cameras detected")
        return

    table = Table(title="Cameras")
    for column in ("index", "vendor", "model", "serial"):
        table.add_column(column.capitalize())
    for camera in cameras:
        table.add_row(*(str(camera[c]) for c in ("index", "vendor", "model", "serial")))
    Console().print(table)
