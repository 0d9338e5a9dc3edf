from __future__ import annotations

from ..models import Mode

_REGISTRY: dict[Mode, type] = {}


def register_mode(cls: type) -> type:
    """Class decorator to register a mode implementation by its MODE."""
    key = getattr(cls, "MODE", None)
    if not isinstance(key, Mode):
        raise ValueError(f"{cls.__name__} must define MODE as a Mode member")
    _REGISTRY[key] = cls
    return cls


def mode_class(key) -> type:
    mode = Mode.from_key(key)
    cls = _REGISTRY.get(mode)
    if not cls:
        raise KeyError(f"No mode registered for '{mode.value}'")
    return cls


def create_mode(key, host):
    return mode_class(key)(host)


def list_modes() -> list[Mode]:
    return [m for m in Mode if m in _REGISTRY]


def check_complete():
    """Raise if any Mode member lacks an implementation."""
    missing = [m.value for m in Mode if m not in _REGISTRY]
    if missing:
        raise RuntimeError(f"Modes without an implementation: {', '.join(missing)}")
