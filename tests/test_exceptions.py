# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
from stubhttp import StubHttpError
from stubhttp.exceptions import (
    BindError,
    HitCountMismatchError,
    PanickedRequestsError,
    ServerAssertionError,
    ServerNotCalledError,
    ServerPanicError,
)


def test_ServerNotCalledError():
    exc = ServerNotCalledError()
    assert str(exc) == "test server exited without being called"
    assert isinstance(exc, ServerAssertionError)
    assert isinstance(exc, AssertionError)
    assert isinstance(exc, StubHttpError)


def test_PanickedRequestsError():
    exc = PanickedRequestsError(3)
    assert str(exc) == "numbers of panicked requests: 3"
    assert exc.failed_hits == 3
    assert isinstance(exc, AssertionError)


def test_ServerPanicError():
    exc = ServerPanicError(3.0)
    assert str(exc).startswith("test server should not panic")
    assert "3.0s" in str(exc)
    assert exc.timeout == 3.0


def test_HitCountMismatchError():
    exc = HitCountMismatchError(2, 1)
    assert str(exc) == "expected 2 successful hits, got 1"
    assert (exc.expected, exc.actual) == (2, 1)
    assert repr(exc) == "HitCountMismatchError: expected 2 successful hits, got 1"


def test_BindError():
    cause = OSError(98, "Address already in use")
    exc = BindError("127.0.0.1", cause)
    assert str(exc) == (
        "could not bind test server to 127.0.0.1: [Errno 98] Address already in use"
    )
    assert exc.caused_by is cause
    assert not isinstance(exc, AssertionError)

