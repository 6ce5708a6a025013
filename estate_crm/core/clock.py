"""
Clock and identifier generation.
Both are injected into the entity store so tests can run deterministically.
"""
from datetime import datetime, timedelta
from typing import Callable, List


Clock = Callable[[], datetime]


def system_clock() -> datetime:
    return datetime.utcnow()


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def later_than(previous: datetime, now: datetime) -> datetime:
    """Return `now`, or the smallest instant after `previous` if the clock has not advanced."""
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class IdGenerator:
    """
    Monotonic identifier sequences.

    Employee ids come from a counter that only moves forward, so an id freed
    by a deletion is never handed out again. Lead and feedback ids embed a
    millisecond stamp that is forced to increase between calls.
    """

    def __init__(
        self,
        employee_prefix: str = "EMP",
        employee_width: int = 3,
        lead_prefix: str = "L",
        feedback_prefix: str = "F",
        next_employee: int = 1,
    ):
        self.employee_prefix = employee_prefix
        self.employee_width = employee_width
        self.lead_prefix = lead_prefix
        self.feedback_prefix = feedback_prefix
        self._next_employee = next_employee
        self._last_batch_ms = 0
        self._last_feedback_ms = 0

    def next_employee_id(self) -> str:
        number = self._next_employee
        self._next_employee += 1
        return f"{self.employee_prefix}{str(number).zfill(self.employee_width)}"

    def reserve_employee_id(self, employee_id: str) -> None:
        """Advance the counter past an id loaded from outside (seed data)."""
        suffix = employee_id[len(self.employee_prefix):]
        if employee_id.startswith(self.employee_prefix) and suffix.isdigit():
            self._next_employee = max(self._next_employee, int(suffix) + 1)

    def lead_ids(self, now: datetime, count: int) -> List[str]:
        stamp = max(to_millis(now), self._last_batch_ms + 1)
        self._last_batch_ms = stamp
        return [f"{self.lead_prefix}{stamp}-{idx}" for idx in range(count)]

    def feedback_id(self, now: datetime) -> str:
        stamp = max(to_millis(now), self._last_feedback_ms + 1)
        self._last_feedback_ms = stamp
        return f"{self.feedback_prefix}{stamp}"
