"""
Axis configuration for a spectrogram image.

Holds the image reference together with the time and frequency bounds that
the image spans. Values arrive from an external table-extraction step as
strings or numbers and are validated once here, at construction.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a spectrogram config is malformed."""


# accepted spellings for each bound, first match wins
_KEY_ALIASES = {
    "image_url": ("image_url", "imageUrl", "image", "src"),
    "time_min": ("time_min", "timeMin", "time-start"),
    "time_max": ("time_max", "timeMax", "time-end"),
    "freq_min": ("freq_min", "freqMin", "freq-start"),
    "freq_max": ("freq_max", "freqMax", "freq-end"),
}


def _lookup(raw: Mapping[str, Any], field: str):
    for key in _KEY_ALIASES[field]:
        if key in raw:
            return raw[key]
    return None


def _as_float(name: str, value) -> float:
    if value is None:
        raise ConfigError(f"Missing axis bound '{name}'")
    if isinstance(value, bool):
        raise ConfigError(f"Axis bound '{name}' must be numeric, got {value!r}")
    try:
        out = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Axis bound '{name}' must be numeric, got {value!r}") from e
    if not math.isfinite(out):
        raise ConfigError(f"Axis bound '{name}' must be finite, got {value!r}")
    return out


@dataclass(frozen=True)
class AxisConfig:
    """
    Image reference and data ranges of one spectrogram.

    Attributes
    ----------
    image_url : str
        Path or URL of the spectrogram image.
    time_min, time_max : float
        Time range in seconds (vertical axis, earliest at the bottom).
    freq_min, freq_max : float
        Frequency range in Hz (horizontal axis).
    """

    image_url: str
    time_min: float
    time_max: float
    freq_min: float
    freq_max: float

    def __post_init__(self):
        if not self.image_url:
            raise ConfigError("Spectrogram config has no image reference")
        for name in ("time_min", "time_max", "freq_min", "freq_max"):
            object.__setattr__(self, name, _as_float(name, getattr(self, name)))
        if self.time_min >= self.time_max:
            raise ConfigError(
                f"time_min ({self.time_min}) must be less than time_max ({self.time_max})")
        if self.freq_min >= self.freq_max:
            raise ConfigError(
                f"freq_min ({self.freq_min}) must be less than freq_max ({self.freq_max})")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "AxisConfig":
        """
        Build a config from a loosely keyed mapping.

        Accepts snake_case, camelCase and the ``time-start``/``freq-end``
        table spellings.

        Raises
        ------
        ConfigError
            If a bound is missing or non-numeric, a range is empty or
            inverted, or no image reference is given.
        """
        if raw is None:
            raise ConfigError("No spectrogram config supplied")
        image = _lookup(raw, "image_url")
        cfg = cls(
            image_url=str(image) if image else "",
            time_min=_lookup(raw, "time_min"),
            time_max=_lookup(raw, "time_max"),
            freq_min=_lookup(raw, "freq_min"),
            freq_max=_lookup(raw, "freq_max"),
        )
        logger.debug(f"Axis config loaded: time {cfg.time_min}-{cfg.time_max}s, "
                     f"freq {cfg.freq_min}-{cfg.freq_max}Hz")
        return cfg

    @property
    def time_range(self) -> float:
        return self.time_max - self.time_min

    @property
    def freq_range(self) -> float:
        return self.freq_max - self.freq_min

    def to_dict(self) -> dict:
        return {
            "image_url": self.image_url,
            "time_min": self.time_min,
            "time_max": self.time_max,
            "freq_min": self.freq_min,
            "freq_max": self.freq_max,
        }
