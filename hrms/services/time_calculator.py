"""
Work-hour derivation for a single attendance record.

Pure functions only: the attendance model calls derive() from its
insert/update hooks so stored hours always match the timestamps.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from hrms.core.enums import AttendanceStatus

SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class TimeDerivation:
    work_hours: float
    extra_hours: float
    status: AttendanceStatus


def worked_hours(check_in_time: datetime, check_out_time: datetime) -> float:
    """Raw hours between two timestamps, clamped at zero for an inverted pair."""
    seconds = (check_out_time - check_in_time).total_seconds()
    return max(seconds, 0.0) / SECONDS_PER_HOUR


def derive(
    check_in_time: Optional[datetime],
    check_out_time: Optional[datetime],
    standard_hours: float = 8.0,
) -> Optional[TimeDerivation]:
    """
    Derive (work_hours, extra_hours, status) from a timestamp pair.

    Returns None when there is no check-in: the record's status then belongs
    to whoever wrote it (absent by default, or on leave).
    """
    if check_in_time is None:
        return None

    if check_out_time is None:
        return TimeDerivation(work_hours=0.0, extra_hours=0.0, status=AttendanceStatus.PRESENT)

    raw = worked_hours(check_in_time, check_out_time)
    return TimeDerivation(
        work_hours=min(raw, standard_hours),
        extra_hours=max(0.0, raw - standard_hours),
        status=AttendanceStatus.PRESENT,
    )
