"""Tests for synchronous command processing with retry."""

from unittest.mock import patch

import pytest
from protean.exceptions import ExpectedVersionError

from storefront.errors import NotFound
from storefront.utils import processing


class _Flaky:
    def __init__(self, failures, exc=ExpectedVersionError):
        self.failures = failures
        self.exc = exc
        self.calls = 0

    def __call__(self, command, asynchronous=False):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc("transient")
        return "done"


@pytest.fixture(autouse=True)
def _no_backoff(monkeypatch):
    monkeypatch.setattr(processing.settings, "RETRY_INITIAL_WAIT", 0)
    monkeypatch.setattr(processing.settings, "RETRY_MAX_WAIT", 0)


class TestProcess:
    def test_transient_failure_is_retried(self):
        flaky = _Flaky(failures=2)
        with patch.object(processing, "current_domain") as domain:
            domain.process = flaky
            assert processing.process(object(), attempts=3) == "done"
        assert flaky.calls == 3

    def test_gives_up_after_attempts(self):
        flaky = _Flaky(failures=5, exc=ConnectionError)
        with patch.object(processing, "current_domain") as domain:
            domain.process = flaky
            with pytest.raises(ConnectionError):
                processing.process(object(), attempts=2)
        assert flaky.calls == 2

    def test_business_errors_are_not_retried(self):
        flaky = _Flaky(failures=1, exc=NotFound)
        with patch.object(processing, "current_domain") as domain:
            domain.process = flaky
            with pytest.raises(NotFound):
                processing.process(object(), attempts=3)
        assert flaky.calls == 1
