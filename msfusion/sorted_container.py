"""A time-keyed container of states or measurements with closest-time lookup."""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Generic, Iterator, TypeVar

from sortedcontainers import SortedDict

logger = logging.getLogger(__name__)

INVALID_TIME = -1.0
"""Time stamp carried by the object that signals an unsatisfiable request."""

T = TypeVar("T")


class SortedContainer(Generic[T]):
    """Objects with a ``time`` attribute, kept in strictly increasing time order.

    Requests that cannot be satisfied return the container's *invalid* object,
    whose ``time`` is :data:`INVALID_TIME`.
    """

    def __init__(self, invalid_factory: Callable[[], T]) -> None:
        self._items: SortedDict = SortedDict()
        self._invalid = invalid_factory()
        self._invalid.time = INVALID_TIME

    def invalid(self) -> T:
        """Return the object that signals an unsatisfiable request."""
        return self._invalid

    def insert(self, value: T) -> T:
        """Insert ``value`` at its time; keep the existing object on a clash.

        Returns the object stored at that time afterwards.
        """
        time = value.time
        existing = self._items.get(time)
        if existing is not None:
            logger.warning(
                "Wanted to insert a value to the sorted container at time %.9f"
                " but the map already contained a value at this time. discarding.",
                time,
            )
            return existing
        self._items[time] = value
        return value

    def clear(self) -> None:
        """Drop all contents."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items.values())

    def values(self) -> list[T]:
        """Return the stored objects in increasing time order."""
        return list(self._items.values())

    def get_closest_before(self, time: float) -> T:
        """Return the last object strictly before ``time``.

        If nothing lies before ``time`` the first object is returned; an empty
        container yields the invalid object.
        """
        if not self._items:
            logger.warning(
                "Requested the first object before time %s but the container is empty",
                time,
            )
            return self._invalid
        index = self._items.bisect_left(time)
        if index == 0:
            return self._items.peekitem(0)[1]
        return self._items.peekitem(index - 1)[1]

    def get_closest_after(self, time: float) -> T:
        """Return the first object strictly after ``time``, or the invalid object."""
        index = self._items.bisect_right(time)
        if index == len(self._items):
            return self._invalid
        return self._items.peekitem(index)[1]

    def get_value_at(self, time: float) -> T:
        """Return the object stored exactly at ``time``, or the invalid object."""
        return self._items.get(time, self._invalid)

    def get_closest(self, time: float) -> T:
        """Return the object closest to ``time``; ties go to the earlier one."""
        at = self.get_value_at(time)
        if at is not self._invalid:
            return at
        before = self.get_closest_before(time)
        after = self.get_closest_after(time)
        if before.time == INVALID_TIME:
            return after
        if after.time == INVALID_TIME:
            return before
        if math.fabs(after.time - time) < math.fabs(before.time - time):
            return after
        return before

    def _index_closest(self, time: float) -> int:
        if time in self._items:
            return self._items.index(time)
        before = self._items.bisect_left(time) - 1
        after = self._items.bisect_right(time)
        if before < 0:
            return 0
        if after == len(self._items):
            return before
        after_time = self._items.peekitem(after)[0]
        before_time = self._items.peekitem(before)[0]
        if math.fabs(after_time - time) < math.fabs(before_time - time):
            return after
        return before

    def clear_older_than(self, age: float) -> None:
        """Remove objects older than ``age`` seconds before the newest one."""
        if not self._items:
            return
        newest = self.get_last().time
        index = self._index_closest(newest - age)
        closest_time = self._items.peekitem(index)[0]
        if newest - closest_time < age:
            return
        if closest_time > self._items.peekitem(0)[0]:
            for key in list(self._items.islice(0, index)):
                del self._items[key]

    def get_last(self) -> T:
        """Return the newest object, or the invalid object if empty."""
        if not self._items:
            logger.warning(
                "Requested the last object in the sorted container, but the container is empty"
            )
            return self._invalid
        return self._items.peekitem(-1)[1]

    def get_first(self) -> T:
        """Return the oldest object, or the invalid object if empty."""
        if not self._items:
            logger.warning(
                "Requested the first object in the sorted container, but the container is empty"
            )
            return self._invalid
        return self._items.peekitem(0)[1]

    def update_time(self, time_old: float, time_new: float) -> T:
        """Move the object at ``time_old`` to ``time_new`` and return it.

        If no object sits at ``time_old`` the closest object is returned
        unchanged.
        """
        value: Any = self._items.get(time_old)
        if value is None:
            listing = "".join(f"{key}\n" for key in self._items)
            logger.warning(
                "Wanted to update a states/measurements time, but could not find the"
                " old state, for which the time was asked to be updated. time %.9f\n"
                "Map: \n%s",
                time_old,
                listing,
            )
            return self.get_closest(time_old)
        del self._items[time_old]
        value.time = time_new
        return self.insert(value)

    def echo_buffer_content_times(self) -> str:
        """Return the stored times, one per line, with nine decimals."""
        return "".join(f"{value.time:.9f}\n" for value in self._items.values())