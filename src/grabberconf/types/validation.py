"""Errors and profile validation.

Validation follows the same `(is_valid, message)` convention used for the
other checks in this package, so callers can decide whether to raise or
report. `ensure_valid_profile` is the raising variant used by the applier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .profile import ACQUISITION_START, ACQUISITION_STOP, Action, Port

if TYPE_CHECKING:
    from .profile import Operation, Profile

VALID_VALUE_TYPES = (str, int, bool, float)


class GrabberConfigError(Exception):
    """Base exception for grabberconf errors."""

    pass


class ProfileValidationError(GrabberConfigError):
    """A profile breaks the ordering or typing rules."""

    pass


class ProfileNotFoundError(GrabberConfigError, KeyError):
    """No profile with the requested name exists."""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep the message readable
        return str(self.args[0]) if self.args else ""


class ScriptParseError(GrabberConfigError):
    """An eGrabber script contains a statement that can't be read."""

    def __init__(self, message: str, line_no: int | None = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class DeviceOperationError(GrabberConfigError):
    """The device rejected a get/set/execute call."""

    pass


class GrabberSelectionError(GrabberConfigError):
    """No grabber available at the requested index."""

    pass


class ProfileApplicationError(GrabberConfigError):
    """Applying a profile stopped part-way through.

    Attributes
    ----------
    profile_name : str
        Name of the profile being applied.
    step : int
        1-based index of the operation that failed.
    operation : Operation
        The operation that failed.
    n_applied : int
        Number of operations that completed before the failure. The device
        is left in the state these produced.
    """

    def __init__(
        self, profile_name: str, step: int, operation: Operation, n_applied: int
    ):
        self.profile_name = profile_name
        self.step = step
        self.operation = operation
        self.n_applied = n_applied
        super().__init__(
            f"Profile '{profile_name}' failed at step {step} ({operation}); "
            + f"{n_applied} operation(s) were applied before the failure"
        )


def validate_operation(op: Operation) -> tuple[bool, str]:
    """Check a single operation is well formed."""
    if not isinstance(op.port, Port):
        return False, f"Unknown port: {op.port!r}"
    if not op.key:
        return False, f"Empty feature/command name in {op}"
    if op.action is Action.EXECUTE:
        if op.value is not None:
            return False, f"Command {op.key} takes no value"
    elif op.action is Action.SET:
        if op.value is None:
            return False, f"Feature {op.key} is set without a value"
        if not isinstance(op.value, VALID_VALUE_TYPES):
            return (
                False,
                f"Feature {op.key} has unsupported value type "
                + f"{type(op.value).__name__}",
            )
    else:
        return False, f"Unknown action: {op.action!r}"
    return True, ""


def validate_profile(profile: Profile) -> tuple[bool, str]:
    """Validate the structure of a profile.

    A valid profile stops acquisition first, starts it last and runs no other
    command in between, so every feature write happens with acquisition
    stopped and nothing restarts it between offset and geometry writes.

    Parameters
    ----------
    profile : Profile
        Profile to check

    Returns
    -------
    tuple[bool, str]
        (is_valid, error_message)
    """
    ops = profile.operations
    if not ops:
        return False, f"Profile '{profile.name}' has no operations"

    for i, op in enumerate(ops, start=1):
        is_valid, msg = validate_operation(op)
        if not is_valid:
            return False, f"Step {i}: {msg}"

    if not ops[0].is_command(Port.REMOTE, ACQUISITION_STOP):
        return (
            False,
            f"Profile '{profile.name}' must start with "
            + f"{Port.REMOTE}.execute('{ACQUISITION_STOP}'), got {ops[0]}",
        )
    if len(ops) < 2 or not ops[-1].is_command(Port.REMOTE, ACQUISITION_START):
        return (
            False,
            f"Profile '{profile.name}' must end with "
            + f"{Port.REMOTE}.execute('{ACQUISITION_START}'), got {ops[-1]}",
        )

    for i, op in enumerate(ops[1:-1], start=2):
        if op.action is Action.EXECUTE:
            return (
                False,
                f"Step {i}: command {op.key} is not allowed while the profile "
                + "holds acquisition stopped",
            )

    return True, ""


def ensure_valid_profile(profile: Profile) -> None:
    """Raise ProfileValidationError if `profile` is invalid."""
    is_valid, msg = validate_profile(profile)
    if not is_valid:
        raise ProfileValidationError(msg)
