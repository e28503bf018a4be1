from __future__ import annotations
from typing import Callable, Dict, List
import logging
import threading

from config import get_config
from refcount import Handle

logger = logging.getLogger(__name__)

CONSTANT_NAMES = ("zero", "one", "i", "neg_one", "neg_i")

class ConstantRegistry:
    """
    Lazily built singletons {0, 1, i, -1, -i} for one tier.

    The first get(name) builds the value, pins its reference count and
    publishes it; later calls return the same object retained. Publication
    is double-checked under a lock so concurrent first callers agree on one
    object. Published values are never freed.
    """

    def __init__(self, tier: str, factories: Dict[str, Callable[[], Handle]]):
        missing = [n for n in CONSTANT_NAMES if n not in factories]
        if missing:
            raise ValueError(f"ConstantRegistry({tier}): missing factories {missing}")
        self.tier = tier
        self._factories = dict(factories)
        self._values: Dict[str, Handle] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> Handle:
        value = self._values.get(name)
        if value is None:
            with self._lock:
                value = self._values.get(name)
                if value is None:
                    value = self._factories[name]()
                    value._rc.pin(get_config().singleton_bias)
                    self._values[name] = value
                    logger.debug("%s: interned constant %s = %s", self.tier, name, value)
        return value.retain()

    def is_interned(self, value: Handle) -> bool:
        return any(v is value for v in self._values.values())

    def names(self) -> List[str]:
        return [n for n in CONSTANT_NAMES if n in self._values]
