# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""
This file should hold most string literals and magic numbers used throughout the code base.
The exception is if a literal is specifically meant to be private to and isolated within a module.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Final

# Port 0 asks the OS for an unused ephemeral port.
LOOPBACK_HOST: Final = "127.0.0.1"
EPHEMERAL_PORT: Final = 0

#: Seconds disposal waits for the serving thread to report it finished.
DEFAULT_SHUTDOWN_TIMEOUT: Final = 3.0
#: Seconds between checks for a shutdown request in the accept loop.
POLL_INTERVAL: Final = 0.05

SERVER_THREAD_NAME: Final = "test-server"
BIND_THREAD_NAME: Final = "test-server-bind"


class ServerState(Enum):
    RUNNING = "running"
    SHUTDOWN_REQUESTED = "shutdown_requested"
    DRAINING = "draining"
    STOPPED = "stopped"

    def __str__(self) -> str:
        return self.value
