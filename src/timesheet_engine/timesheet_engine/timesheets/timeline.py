"""Minute timeline anchored at 00:00 of the work date.

Everything that may cross midnight (overnight shifts, check-outs, night windows)
is placed on this timeline before any comparison, so 06:00 on the next day is
minute 1800 and never compares as "earlier" than 22:00 (minute 1320).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import to_minutes
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import SegmentKind
from ..core.exceptions import InvalidTimeRangeError, MissingCheckInError
from .model import TimesheetInput, TimesheetSegment

Interval = tuple[int, int]


@dataclass(frozen=True)
class DayTimeline:
    check_in: int
    check_out: int
    shift_start: int
    shift_end: int
    incomplete: bool


def place_on_timeline(data: TimesheetInput) -> DayTimeline:
    """Normalize one day's check-in/out and shift onto the timeline.

    A check-out earlier than the check-in is next-day only when the shift itself
    crosses midnight; otherwise it is a data error.
    """

    if data.check_in is None:
        raise MissingCheckInError(f"No check-in for {data.employee_id} on {data.work_date.isoformat()}")

    shift_start = to_minutes(data.shift_start)
    shift_end = to_minutes(data.shift_end)
    overnight = shift_end <= shift_start
    if overnight:
        shift_end += MINUTES_PER_DAY

    check_in = to_minutes(data.check_in)
    # On an overnight shift a check-in after midnight belongs to the next-day half.
    if overnight and check_in < shift_start and check_in <= to_minutes(data.shift_end):
        check_in += MINUTES_PER_DAY

    incomplete = data.check_out is None
    if incomplete:
        check_out = shift_end
    else:
        check_out = to_minutes(data.check_out)
        while check_out < check_in:
            if not overnight:
                raise InvalidTimeRangeError(
                    f"Check-out {data.check_out.strftime('%H:%M')} precedes check-in "
                    f"{data.check_in.strftime('%H:%M')} on a day shift"
                )
            check_out += MINUTES_PER_DAY

    return DayTimeline(
        check_in=check_in,
        check_out=check_out,
        shift_start=shift_start,
        shift_end=shift_end,
        incomplete=incomplete,
    )


def overlap(a: Interval, b: Interval) -> int:
    return max(0, min(a[1], b[1]) - max(a[0], b[0]))


def night_windows(start: Optional[time], end: Optional[time]) -> list[Interval]:
    """The night window repeated on the previous, current and next day.

    A window whose end is not after its start wraps past midnight.
    """

    if start is None or end is None or start == end:
        return []
    s = to_minutes(start)
    e = to_minutes(end)
    if e <= s:
        e += MINUTES_PER_DAY
    return [(s + offset, e + offset) for offset in (-MINUTES_PER_DAY, 0, MINUTES_PER_DAY)]


def overlap_minutes(interval: Interval, windows: Iterable[Interval]) -> int:
    return sum(overlap(interval, w) for w in windows)


def split_segments(paid: Interval, regular_end: int, windows: Sequence[Interval]) -> tuple[TimesheetSegment, ...]:
    """Partition the paid interval at the overtime boundary and night-window edges."""

    start, end = paid
    if end <= start:
        return ()

    cuts = {start, end}
    if start < regular_end < end:
        cuts.add(regular_end)
    for ws, we in windows:
        for edge in (ws, we):
            if start < edge < end:
                cuts.add(edge)

    points = sorted(cuts)
    segments: list[TimesheetSegment] = []
    for seg_start, seg_end in zip(points, points[1:]):
        kind = SegmentKind.REGULAR if seg_start < regular_end else SegmentKind.OVERTIME
        night = any(ws <= seg_start and seg_end <= we for ws, we in windows)
        if segments and segments[-1].kind == kind and segments[-1].night == night:
            last = segments.pop()
            segments.append(TimesheetSegment(last.start_minute, seg_end, kind, night))
        else:
            segments.append(TimesheetSegment(seg_start, seg_end, kind, night))
    return tuple(segments)
