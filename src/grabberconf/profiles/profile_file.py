"""Profile storage in INI files.

User profiles live in `~/.grabberconf/profiles.ini`, one section per profile.
Each operation is one `step.NN` entry, applied in step-number order:

[line_trigger_strobe]
description = 512x96 window, external trigger on LinkTrigger0, LED strobe on TTLIO11
step.01 = RemotePort execute AcquisitionStop
step.02 = InterfacePort set LineSelector TTLIO12
step.07 = InterfacePort set LineInverter true
step.09 = RemotePort set Width 512
step.15 = DevicePort set ExposureRecoveryTime "200"

Values are read as JSON literals where they are one (`512`, `true`, `"200"`)
and as plain strings otherwise (`TTLIO12`), so the python type written to the
device survives a save/load cycle.

Profiles in the user file take precedence over the packaged ones of the same
name (compared case-insensitively).

See Also
--------
grabberconf.profiles.builtin : Packaged profiles
grabberconf.profiles.script : eGrabber script import/export
"""

from __future__ import annotations

from configparser import DEFAULTSECT, ConfigParser
from pathlib import Path

import simplejson as json
from loguru import logger

from grabberconf.types import (
    Action,
    Operation,
    Port,
    Profile,
    ProfileNotFoundError,
    ProfileValidationError,
)
from grabberconf.util.defaults import CONFIG_DIR_NAME, PROFILES_FILE_NAME

from .builtin import BUILTIN_PROFILES, get_builtin_profile

STEP_PREFIX = "step."
DESCRIPTION_KEY = "description"
RESERVED_SECTION = DEFAULTSECT


def profiles_file_path() -> Path:
    return Path.home() / CONFIG_DIR_NAME / PROFILES_FILE_NAME


def _new_parser() -> ConfigParser:
    # no interpolation: feature values are written verbatim
    return ConfigParser(interpolation=None)


def parse_port(token: str) -> Port:
    for port in Port:
        if token.lower() in (port.value.lower(), port.name.lower()):
            return port
    raise ValueError(f"Unknown port: {token}")


def parse_value(token: str):
    """Read a feature value, keeping its python type."""
    token = token.strip()
    try:
        value = json.loads(token)
    except json.JSONDecodeError:
        return token
    if isinstance(value, (str, int, float, bool)):
        return value
    # lists, objects and null are not feature values, keep the raw text
    return token


def format_value(value) -> str:
    if isinstance(value, str):
        # quote anything that would otherwise come back as another type
        if value == "" or value != value.strip() or parse_value(value) != value:
            return json.dumps(value)
        return value
    return json.dumps(value)


def parse_step(text: str) -> Operation:
    """Parse a `<port> <action> <key> [value]` step entry."""
    parts = text.split(maxsplit=3)
    if len(parts) < 3:
        raise ValueError(f"Malformed step: {text!r}")
    port = parse_port(parts[0])
    try:
        action = Action(parts[1].lower())
    except ValueError:
        raise ValueError(f"Unknown action {parts[1]!r} in step: {text!r}")
    key = parts[2]
    if action is Action.EXECUTE:
        if len(parts) > 3:
            raise ValueError(f"Command takes no value: {text!r}")
        return Operation.execute(port, key)
    if len(parts) < 4:
        raise ValueError(f"Missing value in step: {text!r}")
    return Operation.set(port, key, parse_value(parts[3]))


def format_step(op: Operation) -> str:
    if op.action is Action.EXECUTE:
        return f"{op.port} {op.action} {op.key}"
    return f"{op.port} {op.action} {op.key} {format_value(op.value)}"


def profile_to_section(profile: Profile) -> dict[str, str]:
    width = max(2, len(str(len(profile))))
    section = {DESCRIPTION_KEY: profile.description}
    for i, op in enumerate(profile.operations, start=1):
        section[f"{STEP_PREFIX}{i:0{width}d}"] = format_step(op)
    return section


def profile_from_section(name: str, section) -> Profile:
    """Build a profile from a parsed INI section (or any str -> str mapping)."""
    steps = []
    for key, text in section.items():
        if not key.startswith(STEP_PREFIX):
            continue
        number = key[len(STEP_PREFIX) :]
        if not number.isdigit():
            raise ProfileValidationError(
                f"Profile '{name}': step key {key} is not numbered"
            )
        try:
            steps.append((int(number), parse_step(text)))
        except ValueError as e:
            raise ProfileValidationError(f"Profile '{name}', {key}: {e}") from e

    numbers = [n for n, _ in steps]
    if len(set(numbers)) != len(numbers):
        raise ProfileValidationError(f"Profile '{name}' has duplicate step numbers")

    steps.sort(key=lambda step: step[0])
    return Profile(
        name=name,
        operations=tuple(op for _, op in steps),
        description=section.get(DESCRIPTION_KEY, ""),
    )


def _read_user_file(file_path: Path) -> ConfigParser:
    config = _new_parser()
    if file_path.exists():
        config.read(file_path)
    return config


def _find_section(config: ConfigParser, name: str) -> str | None:
    for section in config.sections():
        if section.lower() == name.lower():
            return section
    return None


def load_profile(name: str, file_path: Path | None = None) -> Profile:
    """Load a profile by name.

    Parameters
    ----------
    name : str
        Profile name, case-insensitive.
    file_path : Path, optional
        User profiles file, defaults to `~/.grabberconf/profiles.ini`.

    Returns
    -------
    Profile
        The profile from the user file if it has one of that name, otherwise
        the packaged one.

    Raises
    ------
    ProfileNotFoundError
        If neither the user file nor the package has the profile.
    ProfileValidationError
        If the user file section can't be parsed.
    """
    file_path = profiles_file_path() if file_path is None else Path(file_path)

    config = _read_user_file(file_path)
    section = _find_section(config, name)
    if section is not None:
        logger.debug(f"Loading profile '{section}' from {file_path}")
        return profile_from_section(section, config[section])

    profile = get_builtin_profile(name)
    if profile is not None:
        logger.debug(f"Loading packaged profile '{profile.name}'")
        return profile

    raise ProfileNotFoundError(
        f"Profile '{name}' not found in:\n"
        f"- User profiles: {file_path}\n"
        f"- Package profiles: {', '.join(BUILTIN_PROFILES)}"
    )


def list_available_profiles(file_path: Path | None = None) -> dict[str, str]:
    """Map each available profile name to its source ('user' or 'package').

    User profiles override packaged profiles of the same name. Profiles are
    not validated.
    """
    file_path = profiles_file_path() if file_path is None else Path(file_path)

    profiles = {name: "package" for name in BUILTIN_PROFILES}
    config = _read_user_file(file_path)
    for section in config.sections():
        for name in list(profiles):
            if name.lower() == section.lower():
                del profiles[name]
        profiles[section] = "user"
    return profiles


def save_profile(
    profile: Profile, file_path: Path | None = None, overwrite: bool = False
) -> None:
    """Write a profile to the user profiles file.

    Raises
    ------
    ValueError
        If the file already has a profile of that name and `overwrite` is False,
        or if the name is reserved by the INI format.
    """
    if profile.name.lower() == RESERVED_SECTION.lower():
        # configparser keeps this section as defaults for every other one
        raise ValueError(f"'{profile.name}' can't be used as a profile name")
    file_path = profiles_file_path() if file_path is None else Path(file_path)

    config = _read_user_file(file_path)
    existing = _find_section(config, profile.name)
    if existing is not None:
        if not overwrite:
            raise ValueError(f"Profile '{profile.name}' already exists in {file_path}")
        config.remove_section(existing)

    config[profile.name] = profile_to_section(profile)

    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w") as f:
        config.write(f)
    logger.info(f"Saved profile '{profile.name}' to {file_path}")


def copy_profile(source: str, dest: str, file_path: Path | None = None) -> Profile:
    """Copy a profile (user or packaged) to a new name in the user file.

    Examples
    --------
    >>> copy_profile("line_trigger_strobe", "line_trigger_strobe_long_exposure")
    """
    profile = load_profile(source, file_path=file_path)
    if dest.lower() in (name.lower() for name in list_available_profiles(file_path)):
        raise ValueError(f"Destination profile '{dest}' already exists")
    new_profile = profile.renamed(dest)
    save_profile(new_profile, file_path=file_path)
    return new_profile


def create_default_profiles_file(file_path: Path | None = None) -> Path:
    """Write the packaged profiles to the user profiles file.

    Sections already in the file are preserved, including user edits of
    packaged profiles.
    """
    file_path = profiles_file_path() if file_path is None else Path(file_path)
    logger.debug(f"Creating default profiles file at {file_path}")

    config = _new_parser()
    for profile in BUILTIN_PROFILES.values():
        config[profile.name] = profile_to_section(profile)

    if file_path.exists():
        logger.debug("Found existing profiles file")
        existing_config = _read_user_file(file_path)
        for section in existing_config.sections():
            packaged = _find_section(config, section)
            if packaged is not None:
                logger.debug(f"Keeping user version of profile: {section}")
                config.remove_section(packaged)
            config[section] = dict(existing_config[section])

    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w") as f:
        config.write(f)
    return file_path
