from pathlib import Path

import click
import simplejson as json
from rich.console import Console
from rich.table import Table

from grabberconf.cli.base import tree_option
from grabberconf.profiles import (
    copy_profile,
    create_default_profiles_file,
    list_available_profiles,
    load_profile,
    load_script,
    profiles_file_path,
    save_profile,
    write_script,
)
from grabberconf.types import GrabberConfigError, validate_profile


@click.group()
@tree_option
def profile():
    """Manage configuration profiles."""
    pass


@profile.command(name="list")
def list_profiles():
    """List available profiles and where they come from."""
    profiles = list_available_profiles()
    table = Table(title="Profiles")
    table.add_column("Name")
    table.add_column("Source")
    table.add_column("Operations", justify="right")
    for name, source in sorted(profiles.items()):
        try:
            n_ops = str(len(load_profile(name)))
        except GrabberConfigError:
            n_ops = "invalid"
        table.add_row(name, source, n_ops)
    Console().print(table)
    click.echo(f"User profiles file: {profiles_file_path()}")


@profile.command()
@click.argument("name")
@click.option(
    "--json", "as_json", is_flag=True, default=False, help="Print as JSON instead"
)
def show(name, as_json):
    """Show the operations of a profile, in the order they are applied."""
    try:
        prof = load_profile(name)
    except GrabberConfigError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(prof.to_dict(), indent=2))
        return

    table = Table(title=f"{prof.name}: {prof.description}")
    table.add_column("#", justify="right")
    table.add_column("Port")
    table.add_column("Action")
    table.add_column("Feature")
    table.add_column("Value")
    for i, op in enumerate(prof.operations, start=1):
        value = "" if op.value is None else repr(op.value)
        table.add_row(str(i), str(op.port), str(op.action), op.key, value)
    Console().print(table)

    is_valid, msg = validate_profile(prof)
    if not is_valid:
        click.echo(f"WARNING: {msg}")


@profile.command()
def init():
    """Write the packaged profiles to the user profiles file."""
    path = create_default_profiles_file()
    click.echo(f"Profiles written to {path}")


@profile.command()
@click.argument("source")
@click.argument("dest")
def copy(source, dest):
    """Copy profile SOURCE to a new user profile DEST."""
    try:
        copy_profile(source, dest)
    except (GrabberConfigError, ValueError) as e:
        raise click.ClickException(str(e))
    click.echo(f"Copied profile '{source}' to '{dest}'")


@profile.command()
@click.argument("name")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Script path (default: <name>.js)",
)
def export(name, output):
    """Export a profile as an eGrabber .js script."""
    try:
        prof = load_profile(name)
        path = write_script(prof, output or f"{prof.name}.js")
    except GrabberConfigError as e:
        raise click.ClickException(str(e))
    click.echo(f"Wrote {path}")


@profile.command(name="import")
@click.argument("script", type=click.Path(exists=True, dir_okay=False))
@click.option("--name", "-n", help="Profile name (default: script file name)")
@click.option(
    "--overwrite", is_flag=True, default=False, help="Replace an existing profile"
)
def import_script(script, name, overwrite):
    """Import an eGrabber .js script as a user profile."""
    try:
        prof = load_script(script, name=name or Path(script).stem)
    except GrabberConfigError as e:
        raise click.ClickException(str(e))

    is_valid, msg = validate_profile(prof)
    if not is_valid:
        raise click.ClickException(f"Script can't be used as a profile: {msg}")

    try:
        save_profile(prof, overwrite=overwrite)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"Imported '{prof.name}' ({len(prof)} operations)")
