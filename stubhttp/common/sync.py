# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Thread synchronization primitives shared between a test and its server threads."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Callable


class HitCounter:
    """Integer counter that may be incremented from many threads at once."""

    def __init__(self, value: int = 0):
        self._value = value
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value})"


class OneShot:
    """Signal whose callback runs on the first :meth:`fire` and never again.

    Later calls to :meth:`fire` are no-ops, so a signal may be fired from more than one
    place without running its callback twice.
    """

    def __init__(self, callback: Callable[[], object]):
        self._callback = callback
        self._lock = threading.Lock()
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def fire(self) -> bool:
        """Run the callback if this is the first call.

        :return: True if this call ran the callback, False if it had already been fired.
        """
        with self._lock:
            if self._fired:
                return False
            self._fired = True
        self._callback()
        return True
