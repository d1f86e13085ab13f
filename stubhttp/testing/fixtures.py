# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Collection of pytest fixtures for tests that talk to a stubhttp server.

Enable them with ``pytest_plugins = "stubhttp.testing.fixtures"``.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from ..base.constants import DEFAULT_SHUTDOWN_TIMEOUT
from ..models import Response
from ..server import start_server

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pytest import CallInfo, FixtureRequest, Item, TestReport

    from ..models import Request
    from ..server import Handler, StubServer


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item: Item, call: CallInfo) -> Iterator[None]:
    """Keep each phase's report on the test item as ``rep_setup``, ``rep_call``, ..."""
    outcome = yield
    report: TestReport = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def call_failed(request: FixtureRequest) -> bool:
    """Whether the requesting test failed, or never got to run its body."""
    report = getattr(request.node, "rep_call", None)
    return report is None or not report.passed


def ok_handler(request: Request) -> Response:
    return Response(body="ok")


@dataclass
class StubServerFixture:
    servers: list[StubServer] = field(default_factory=list)

    def __call__(
        self,
        handler: Handler,
        *,
        shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT,
    ) -> StubServer:
        """Start a test server that is closed when the test finishes.

        :param handler: Called for every request the server receives.
        :param shutdown_timeout: Seconds to wait for the server to finish on close.
        :return: The running server.
        """
        server = start_server(handler, shutdown_timeout=shutdown_timeout)
        self.servers.append(server)
        return server

    def close(self, skip_assertions: bool = False) -> None:
        with ExitStack() as stack:
            for server in self.servers:
                stack.callback(server.close, skip_assertions=skip_assertions)


@pytest.fixture
def stub_server_factory(request: FixtureRequest) -> Iterator[StubServerFixture]:
    """A function scoped fixture returning StubServerFixture instance.

    Every server started through it is shut down at teardown. The hit assertions only run
    when the test itself passed, so a failing test reports its own failure.
    """
    factory = StubServerFixture()
    yield factory
    factory.close(skip_assertions=call_failed(request))


@pytest.fixture
def stub_server(
    request: FixtureRequest,
    stub_server_factory: StubServerFixture,
) -> StubServer:
    """A single test server for the current test.

    The handler defaults to answering every request with 200 ``ok``; pass another one by
    indirect parametrization::

        @pytest.mark.parametrize("stub_server", [handler], indirect=True)
        def test_something(stub_server): ...
    """
    handler = getattr(request, "param", ok_handler)
    return stub_server_factory(handler)
