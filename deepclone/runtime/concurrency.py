# deepclone/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generator


def get_lock() -> threading.Lock:
    """
    Provide a new lock instance for the registry and diagnostics tallies.
    """
    return threading.Lock()


@contextmanager
def with_lock(lock: threading.Lock) -> Generator[None, None, None]:
    """
    Acquire the given lock upon entry and release it upon exit, even when the
    guarded block raises.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()
