# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Stubhttp exceptions."""

from __future__ import annotations

from . import StubHttpError


class BindError(StubHttpError):
    def __init__(self, host: str, caused_by: OSError):
        message = "could not bind test server to %(host)s: %(reason)s"
        super().__init__(message, caused_by=caused_by, host=host, reason=caused_by)


class ServerAssertionError(StubHttpError, AssertionError):
    """Raised when a test server was not exercised the way the test expects.

    Subclasses :class:`AssertionError` so test runners report it as a test failure
    rather than an error in the test infrastructure.
    """


class ServerNotCalledError(ServerAssertionError):
    def __init__(self):
        super().__init__("test server exited without being called")


class PanickedRequestsError(ServerAssertionError):
    def __init__(self, failed_hits: int):
        self.failed_hits = failed_hits
        message = "numbers of panicked requests: %(failed_hits)d"
        super().__init__(message, failed_hits=failed_hits)


class ServerPanicError(ServerAssertionError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        message = (
            "test server should not panic "
            "(serving thread did not finish within %(timeout)ss)"
        )
        super().__init__(message, timeout=timeout)


class HitCountMismatchError(ServerAssertionError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        message = "expected %(expected)d successful hits, got %(actual)d"
        super().__init__(message, expected=expected, actual=actual)
