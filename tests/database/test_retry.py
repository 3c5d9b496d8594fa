from __future__ import annotations

import pytest
from mysql.connector import errors

from classroom_attendance.database.mysql_base import with_retry


class Flaky:
    def __init__(self, failures, exc=errors.InterfaceError):
        self.failures = failures
        self.exc = exc
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc("connection lost")
        return "ok"


def test_recovers_after_two_transient_failures():
    sleeps = []
    op = Flaky(2)

    assert with_retry(op, base_delay=0.5, sleep=sleeps.append) == "ok"
    assert op.calls == 3
    assert sleeps == [0.5, 1.0]


def test_gives_up_after_two_retries():
    op = Flaky(3, exc=errors.OperationalError)

    with pytest.raises(errors.OperationalError):
        with_retry(op, sleep=lambda _: None)
    assert op.calls == 3


def test_other_errors_are_not_retried():
    op = Flaky(1, exc=errors.ProgrammingError)

    with pytest.raises(errors.ProgrammingError):
        with_retry(op, sleep=lambda _: None)
    assert op.calls == 1
