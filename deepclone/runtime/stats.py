# deepclone/runtime/stats.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from collections import Counter
from typing import Dict

from deepclone.interfaces.types import TypeTag
from deepclone.runtime.concurrency import get_lock, with_lock


class CloneStats:
    """
    Diagnostics sink tallying how many values of each kind/type were cloned.

    Implements the CloneObserver protocol. Pass one instance to as many
    managers or sessions as should share a tally; writes are lock-protected so
    the same instance can observe sessions running on different threads.
    """

    def __init__(self) -> None:
        self._lock = get_lock()
        self._counts: Counter = Counter()

    def record(self, tag: TypeTag) -> None:
        """
        Increment the count for ``tag``.

        :param tag: Kind name, optionally followed by a qualified type name.
        """
        with with_lock(self._lock):
            self._counts[tag] += 1

    def count(self, tag: TypeTag) -> int:
        """Return the count recorded for ``tag`` (0 if never seen)."""
        with with_lock(self._lock):
            return self._counts[tag]

    @property
    def total(self) -> int:
        """Total number of values recorded across all tags."""
        with with_lock(self._lock):
            return sum(self._counts.values())

    def snapshot(self) -> Dict[TypeTag, int]:
        """Return a copy of the current tally."""
        with with_lock(self._lock):
            return dict(self._counts)

    def format(self) -> str:
        """
        Render the tally as ``"tag: count"`` lines, sorted by tag.
        """
        snapshot = self.snapshot()
        return "".join(f"{tag}: {snapshot[tag]}\n" for tag in sorted(snapshot))
