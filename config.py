from __future__ import annotations
from dataclasses import dataclass, fields, replace
import logging
import sys
import threading

from errors import ContractError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Config:
    """Process-wide settings.

    atomic_refcount:          guard reference-count updates with a lock; applies
                              to values created after the switch
    singleton_bias:           reference count given to interned constants
    default_max_denominator:  denominator bound for gflt_to_grat when none is passed
    """
    atomic_refcount: bool = False
    singleton_bias: int = sys.maxsize // 2
    default_max_denominator: int = 1_000_000

_POSITIVE_INTS = ("singleton_bias", "default_max_denominator")

_current = Config()
_lock = threading.Lock()

def get_config() -> Config:
    return _current

def _validate(cfg: Config) -> None:
    for name in _POSITIVE_INTS:
        value = getattr(cfg, name)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ContractError(f"config {name} must be a positive integer, got {value!r}")
    if not isinstance(cfg.atomic_refcount, bool):
        raise ContractError(f"config atomic_refcount must be a bool, got {cfg.atomic_refcount!r}")

def configure(**overrides) -> Config:
    """Replace selected settings; returns the new Config."""
    global _current
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ContractError(f"Unknown config key(s) {unknown}. Supported keys {sorted(known)}")
    with _lock:
        cfg = replace(_current, **overrides)
        _validate(cfg)
        _current = cfg
    logger.debug("configuration updated: %s", cfg)
    return cfg

def reset_config() -> Config:
    global _current
    with _lock:
        _current = Config()
    return _current
