"""
Tests for retry logic on transient storage errors.
"""

import pytest

from dpelink.exceptions import RepositoryError
from dpelink.retry import RetryError, exponential_backoff, is_transient_error


class TestExponentialBackoff:
    """Test exponential backoff decorator."""

    def test_success_on_first_try(self):
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.01)
        def succeeds():
            call_count[0] += 1
            return "success"

        assert succeeds() == "success"
        assert call_count[0] == 1

    def test_retry_then_succeed(self):
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.01)
        def fails_twice():
            call_count[0] += 1
            if call_count[0] < 3:
                raise ConnectionError("database is locked")
            return "success"

        assert fails_twice() == "success"
        assert call_count[0] == 3

    def test_all_retries_exhausted(self):
        call_count = [0]

        @exponential_backoff(max_retries=2, base_delay=0.01)
        def always_fails():
            call_count[0] += 1
            raise ValueError("Always fails")

        with pytest.raises(RetryError):
            always_fails()

        assert call_count[0] == 3  # Initial + 2 retries

    def test_retry_error_is_a_repository_error(self):
        @exponential_backoff(max_retries=0)
        def fails():
            raise ConnectionError("gone")

        with pytest.raises(RepositoryError) as excinfo:
            fails()
        assert isinstance(excinfo.value.__cause__, ConnectionError)

    def test_only_catches_specified_exceptions(self):
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.01, exceptions=(ConnectionError,))
        def raises_value_error():
            call_count[0] += 1
            raise ValueError("Not retryable")

        with pytest.raises(ValueError):
            raises_value_error()

        assert call_count[0] == 1

    def test_predicate_rejects_permanent_errors(self):
        call_count = [0]

        @exponential_backoff(max_retries=3, base_delay=0.01, should_retry=is_transient_error)
        def missing_table():
            call_count[0] += 1
            raise RuntimeError("no such table: energy_diagnostics")

        with pytest.raises(RuntimeError):
            missing_table()

        assert call_count[0] == 1

    def test_exponential_delay(self):
        delays = []

        @exponential_backoff(
            max_retries=3,
            base_delay=0.01,
            exponential_base=2.0,
            on_retry=lambda attempt, exception, delay: delays.append(delay),
        )
        def always_fails():
            raise ConnectionError("Test")

        with pytest.raises(RetryError):
            always_fails()

        assert delays == [0.01, 0.02, 0.04]

    def test_max_delay_cap(self):
        delays = []

        @exponential_backoff(
            max_retries=4,
            base_delay=0.01,
            max_delay=0.02,
            exponential_base=3.0,
            on_retry=lambda attempt, exception, delay: delays.append(delay),
        )
        def always_fails():
            raise ConnectionError("Test")

        with pytest.raises(RetryError):
            always_fails()

        assert all(d <= 0.02 for d in delays)


class TestTransientErrorDetection:
    """Test transient error detection."""

    @pytest.mark.parametrize("message", [
        "(sqlite3.OperationalError) database is locked",
        "could not connect: Connection refused",
        "server closed the connection unexpectedly",
        "canceling statement due to statement timeout",
        "deadlock detected",
    ])
    def test_transient(self, message):
        assert is_transient_error(Exception(message))

    @pytest.mark.parametrize("message", [
        "(sqlite3.OperationalError) no such table: energy_diagnostics",
        "UNIQUE constraint failed: energy_diagnostics.external_id",
        "syntax error",
    ])
    def test_permanent(self, message):
        assert not is_transient_error(Exception(message))
