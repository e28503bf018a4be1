"""Reference-counted handles for immutable complex values.

Python reclaims memory on its own; the counter here is the ownership contract
callers program against. A value starts with one reference, retain() adds one,
release() drops one. The release that brings a value to zero frees it: its
components are dropped exactly once and every later use of the handle raises
ReleasedHandleError. Interned constants are pinned and never freed.

With Config.atomic_refcount enabled, counters created from then on guard their
updates with a lock, so handles may be shared between threads.
"""

from __future__ import annotations
from contextlib import nullcontext
import logging
import threading

from config import get_config
from errors import ContractError, ReleasedHandleError

logger = logging.getLogger(__name__)


class RefCount:
    __slots__ = ("_count", "_lock", "pinned", "frees")

    def __init__(self):
        self._count = 1
        self._lock = threading.Lock() if get_config().atomic_refcount else None
        self.pinned = False
        self.frees = 0      # times the owning value was freed; 0 or 1

    @property
    def atomic(self) -> bool:
        return self._lock is not None

    @property
    def count(self) -> int:
        return self._count

    @property
    def live(self) -> bool:
        return self.frees == 0

    def _guard(self):
        return self._lock if self._lock is not None else nullcontext()

    def pin(self, bias: int) -> None:
        """Turn the counter into a singleton counter biased by `bias`."""
        # singletons are process-wide, so always lock-guarded
        if self._lock is None:
            self._lock = threading.Lock()
        with self._lock:
            self._count = bias
            self.pinned = True

    def incref(self) -> int:
        with self._guard():
            if self.frees:
                raise ReleasedHandleError("retain of a value after its final release")
            self._count += 1
            return self._count

    def decref(self) -> bool:
        """Drop one reference. Returns True iff this call freed the value."""
        with self._guard():
            if self.frees:
                raise ReleasedHandleError("release of a value after its final release")
            self._count -= 1
            if self._count > 0:
                return False
            if self.pinned:
                self._count = get_config().singleton_bias
                return False
            self.frees += 1
            return True


class Handle:
    """Mixin for the frozen value dataclasses. Subclasses declare `_rc`."""

    _components = ("re", "im")

    def retain(self):
        self._rc.incref()
        return self

    def release(self) -> None:
        if self._rc.decref():
            self._free()

    def _free(self) -> None:
        logger.debug("freeing %s at %#x", type(self).__name__, id(self))
        for name in self._components:
            object.__setattr__(self, name, None)

    @property
    def ref_count(self) -> int:
        return self._rc.count

    @property
    def is_live(self) -> bool:
        return self._rc.live

    @property
    def is_interned(self) -> bool:
        return self._rc.pinned


def check_handle(value, cls, op: str) -> None:
    """Precondition shared by every operation: a live handle of the right tier."""
    if value is None:
        raise ContractError(f"{op}: operand cannot be None")
    if not isinstance(value, cls):
        raise ContractError(f"{op}: expected {cls.__name__}, got {type(value).__name__}")
    if not value._rc.live:
        raise ReleasedHandleError(f"{op}: handle used after its final release")

def release_handle(value, cls, op: str) -> None:
    """Drop one reference on a handle of the given tier; None is a no-op."""
    if value is None:
        return
    if not isinstance(value, cls):
        raise ContractError(f"{op}: expected {cls.__name__}, got {type(value).__name__}")
    value.release()
