from datetime import date, datetime
from decimal import Decimal

from src.timekeeping.timekeeping.attendance.hours import segment_seconds, session_state, total_hours, worked_seconds
from src.timekeeping.timekeeping.attendance.model import Attendance, AttendanceTimestamp
from src.timekeeping.timekeeping.core.enums import SessionState


def _ts(i, start, end=None):
    return AttendanceTimestamp(timestamp_id=i, attendance_id=1, start_time=start, end_time=end)


def test_total_hours_ignores_open_segments():
    segments = [
        _ts(1, datetime(2024, 3, 4, 9, 0), datetime(2024, 3, 4, 10, 20)),
        _ts(2, datetime(2024, 3, 4, 11, 0)),
    ]
    assert total_hours(segments) == Decimal("1.33")


def test_total_hours_rounds_half_up():
    # 45 seconds = 0.0125 h
    segments = [_ts(1, datetime(2024, 3, 4, 9, 0, 0), datetime(2024, 3, 4, 9, 0, 45))]
    assert total_hours(segments) == Decimal("0.01")

    # 27 seconds = 0.0075 h
    segments = [_ts(1, datetime(2024, 3, 4, 9, 0, 0), datetime(2024, 3, 4, 9, 0, 27))]
    assert total_hours(segments) == Decimal("0.01")


def test_negative_segment_counts_as_zero():
    backwards = _ts(1, datetime(2024, 3, 4, 12, 0), datetime(2024, 3, 4, 11, 0))
    assert segment_seconds(backwards) == 0.0
    assert total_hours([backwards]) == Decimal("0.00")


def test_no_segments():
    assert total_hours([]) == Decimal("0.00")


def test_worked_seconds_counts_running_segment_up_to_now():
    segments = [
        _ts(1, datetime(2024, 3, 4, 9, 0), datetime(2024, 3, 4, 10, 0)),
        _ts(2, datetime(2024, 3, 4, 11, 0)),
    ]
    assert worked_seconds(segments, now=datetime(2024, 3, 4, 11, 15)) == 3600 + 15 * 60


def test_session_state_paused_after_reopen_and_pause():
    # Clocked out at 17:00, clocked in again at 18:00 and paused at 18:30.
    row = Attendance(
        attendance_id=1,
        employee_id=2,
        work_date=date(2024, 3, 4),
        clock_in=datetime(2024, 3, 4, 9, 0),
        clock_out=datetime(2024, 3, 4, 17, 0),
        timestamps=(
            _ts(1, datetime(2024, 3, 4, 9, 0), datetime(2024, 3, 4, 17, 0)),
            _ts(2, datetime(2024, 3, 4, 18, 0), datetime(2024, 3, 4, 18, 30)),
        ),
    )
    assert session_state(row) == SessionState.PAUSED


def test_session_state_without_clock_in():
    row = Attendance(attendance_id=1, employee_id=2, work_date=date(2024, 3, 4))
    assert session_state(row) == SessionState.NOT_STARTED
    assert session_state(None) == SessionState.NOT_STARTED
