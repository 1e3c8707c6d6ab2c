"""
Call Arguments

Named-parameter lookup for a signal call. Absent arguments fall back to a
default; present arguments that cannot be parsed raise ArgumentParseError.
"""

from typing import Any, Mapping, Optional, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from pivot_supertrend.core.config import Settings, settings as default_settings
from pivot_supertrend.schemas.signals import BandMode, SignalParams
from pivot_supertrend.services.base import ArgumentParseError

T = TypeVar("T")


class CallArguments:
    """Raw named arguments (query parameters or JSON) with typed access."""

    def __init__(self, raw: Optional[Mapping[str, Any]] = None):
        self._raw = dict(raw or {})

    def __contains__(self, name: str) -> bool:
        return self._raw.get(name) is not None

    def get(self, name: str, type_: type[T], default: T) -> T:
        """
        Parse a named argument.

        Args:
            name: Argument name
            type_: Target type
            default: Value used when the argument is absent

        Raises:
            ArgumentParseError: argument present but not parseable as ``type_``
        """
        raw_value = self._raw.get(name)
        if raw_value is None:
            return default
        try:
            return TypeAdapter(type_).validate_python(raw_value)
        except PydanticValidationError as e:
            raise ArgumentParseError(name, raw_value, getattr(type_, "__name__", str(type_))) from e

    def to_params(self, settings: Optional[Settings] = None) -> SignalParams:
        """Build SignalParams, defaulting absent arguments from settings."""
        cfg = settings or default_settings
        values = {
            "atr_period": self.get("atr_period", int, cfg.default_atr_period),
            "multiplier": self.get("multiplier", float, cfg.default_multiplier),
            "pivot_lookback": self.get("pivot_lookback", int, cfg.default_pivot_lookback),
            "volume_period": self.get("volume_period", int, cfg.default_volume_period),
            "volume_threshold": self.get("volume_threshold", float, cfg.default_volume_threshold),
            "swing_lookback": self.get("swing_lookback", int, cfg.default_swing_lookback),
            "max_pivots": self.get("max_pivots", int, cfg.default_max_pivots),
            "band_mode": self.get("band_mode", BandMode, BandMode(cfg.default_band_mode)),
            "email": self.get("email", str, ""),
        }
        try:
            return SignalParams(**values)
        except PydanticValidationError as e:
            # Out-of-range values parse as the right type but fail the model bounds
            error = e.errors()[0]
            name = str(error["loc"][0]) if error.get("loc") else "arguments"
            expected = type(values[name]).__name__ if name in values else "argument"
            raise ArgumentParseError(name, values.get(name), expected, error["msg"]) from e
