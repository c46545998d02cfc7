"""Applying profiles to grabbers.

Operations are sent strictly in profile order, one blocking call at a time.
The first failure aborts the rest of the profile: nothing is retried and
nothing already written is rolled back, so the device keeps the state left by
the last successful operation and the raised ProfileApplicationError says how
far the profile got.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Sequence

from loguru import logger

from grabberconf.types import (
    Action,
    GrabberProtocol,
    GrabberSelectionError,
    Operation,
    Profile,
    ProfileApplicationError,
    ensure_valid_profile,
)
from grabberconf.util.defaults import DEFAULT_GRABBER_INDEX


@dataclass
class ApplyReport:
    """Outcome of a completed profile application."""

    profile_name: str
    applied: list[Operation] = field(default_factory=list)
    dry_run: bool = False
    duration: float = 0.0  # seconds

    @property
    def n_applied(self) -> int:
        return len(self.applied)


def apply_operation(grabber: GrabberProtocol, op: Operation) -> None:
    port = grabber.get_port(op.port)
    if op.action is Action.EXECUTE:
        port.execute(op.key)
    else:
        port.set(op.key, op.value)


def apply_profile(
    grabber: GrabberProtocol, profile: Profile, dry_run: bool = False
) -> ApplyReport:
    """Apply every operation of `profile` to `grabber`, in order.

    Parameters
    ----------
    grabber : GrabberProtocol
        Open device handle. Owned by the caller, not opened or closed here.
    profile : Profile
        Profile to apply. Validated before anything is sent.
    dry_run : bool, optional
        Only log the operations, by default False.

    Returns
    -------
    ApplyReport
        The operations applied.

    Raises
    ------
    ProfileValidationError
        If the profile is invalid; the device is untouched.
    ProfileApplicationError
        If the device rejects an operation. The device error is chained.
    """
    ensure_valid_profile(profile)

    report = ApplyReport(profile_name=profile.name, dry_run=dry_run)
    if dry_run:
        logger.info(f"Dry run of profile '{profile.name}' ({len(profile)} operations)")
        for i, op in enumerate(profile.operations, start=1):
            logger.info(f"[{i:02d}] {op}")
        report.applied = list(profile.operations)
        return report

    if not isinstance(grabber, GrabberProtocol):
        raise TypeError(
            f"{grabber.__class__.__name__} does not provide get_port(), "
            + "can't apply profiles to it"
        )

    logger.info(f"Applying profile '{profile.name}' ({len(profile)} operations)")
    start = time.perf_counter()
    for i, op in enumerate(profile.operations, start=1):
        logger.debug(f"[{i:02d}] {op}")
        try:
            apply_operation(grabber, op)
        except Exception as e:
            logger.error(
                f"Profile '{profile.name}' aborted at step {i} ({op}): {e}. "
                + f"{report.n_applied} operation(s) left applied."
            )
            raise ProfileApplicationError(
                profile.name, i, op, report.n_applied
            ) from e
        report.applied.append(op)
    report.duration = time.perf_counter() - start

    logger.info(
        f"Profile '{profile.name}' applied in {report.duration * 1e3:.1f} ms"
    )
    return report


def select_grabber(
    grabbers: Sequence[GrabberProtocol], index: int = DEFAULT_GRABBER_INDEX
) -> GrabberProtocol:
    if not grabbers:
        raise GrabberSelectionError("No grabbers available")
    if not 0 <= index < len(grabbers):
        raise GrabberSelectionError(
            f"Grabber index {index} out of range ({len(grabbers)} available)"
        )
    return grabbers[index]


def apply_to_grabbers(
    grabbers: Sequence[GrabberProtocol],
    profile: Profile,
    index: int = DEFAULT_GRABBER_INDEX,
    dry_run: bool = False,
) -> ApplyReport:
    """Apply `profile` to one grabber of a collection, the first by default."""
    grabber = select_grabber(grabbers, index)
    return apply_profile(grabber, profile, dry_run=dry_run)
