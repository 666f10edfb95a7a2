"""Slider configuration and module-level defaults."""

import threading
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Mapping

from timeslider.logging import get_logger

_log = get_logger(__name__)


class Orientation(Enum):
    """Direction in which later items are laid out."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_horizontal(self) -> bool:
        return self in (Orientation.LEFT, Orientation.RIGHT)

    @property
    def is_vertical(self) -> bool:
        return self in (Orientation.UP, Orientation.DOWN)

    @property
    def drag_sign(self) -> int:
        """Sign applied to a drag distance along the scroll axis."""
        return -1 if self in (Orientation.LEFT, Orientation.UP) else 1


@dataclass
class SliderConfig:
    """Configuration for a single TimeSlider."""

    time_units: list[str] = field(default_factory=lambda: ["second", "minute", "hour"])
    time_unit_names: list[str] | None = None  # None = reuse time_units
    format_strings: list[str] = field(
        default_factory=lambda: ["%H:%M:%S", "%H:%M", "%H"]
    )
    orientation: Orientation = Orientation.DOWN
    scroll_speed: float = 1.0
    item_width: int = 150
    item_height: int = 60
    items_before: int = 2
    items_after: int = 2
    friction: float = 0.015
    density: float = 1.0
    time_zone: str = "UTC"
    locale: str | None = None

    @property
    def display_names(self) -> list[str]:
        if self.time_unit_names:
            return list(self.time_unit_names)
        return list(self.time_units)

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], base: "SliderConfig | None" = None
    ) -> "SliderConfig":
        """Build a config from host-supplied options.

        List options accept either a sequence or a ``;``-separated string.
        Unknown keys and unparseable values are logged and ignored, leaving
        the value from ``base`` (the module defaults when omitted).
        """
        config = replace(base) if base is not None else get_default_config()
        known = {f.name for f in fields(cls)}

        for raw_key, value in options.items():
            key = _OPTION_ALIASES.get(raw_key, raw_key)
            if key not in known:
                _log.warning("unknown_slider_option", option=raw_key)
                continue
            if value is None:
                continue
            parser = _PARSERS.get(key)
            if parser is None:
                setattr(config, key, value)
                continue
            try:
                setattr(config, key, parser(value))
            except (TypeError, ValueError):
                _log.warning(
                    "invalid_slider_option",
                    option=raw_key,
                    value=value,
                    default=getattr(config, key),
                )
        return config


def _parse_list(value: Any) -> list[str]:
    if isinstance(value, str):
        items = [item.strip() for item in value.split(";")]
    else:
        items = [str(item) for item in value]
    items = [item for item in items if item]
    if not items:
        raise ValueError("empty list option")
    return items


def _parse_orientation(value: Any) -> Orientation:
    if isinstance(value, Orientation):
        return value
    return Orientation(str(value).strip().lower())


def _parse_positive_int(value: Any) -> int:
    number = int(value)
    if number <= 0:
        raise ValueError("must be positive")
    return number


def _parse_count(value: Any) -> int:
    number = int(value)
    if number < 0:
        raise ValueError("must not be negative")
    return number


def _parse_positive_float(value: Any) -> float:
    number = float(value)
    if number <= 0:
        raise ValueError("must be positive")
    return number


_OPTION_ALIASES = {
    "time_unit": "time_units",
    "format_string": "format_strings",
    "direction": "orientation",
    "number_items_before": "items_before",
    "number_items_after": "items_after",
}

_PARSERS = {
    "time_units": _parse_list,
    "time_unit_names": _parse_list,
    "format_strings": _parse_list,
    "orientation": _parse_orientation,
    "scroll_speed": float,
    "item_width": _parse_positive_int,
    "item_height": _parse_positive_int,
    "items_before": _parse_count,
    "items_after": _parse_count,
    "friction": _parse_positive_float,
    "density": _parse_positive_float,
    "time_zone": str,
}


# Module-level defaults
_default_config: SliderConfig | None = None
_config_lock = threading.Lock()


def _get_default() -> SliderConfig:
    global _default_config
    if _default_config is None:
        with _config_lock:
            if _default_config is None:
                _default_config = SliderConfig()
    return _default_config


def get_default_config() -> SliderConfig:
    """Return a copy of the module-level default slider configuration."""
    default = _get_default()
    with _config_lock:
        return replace(
            default,
            time_units=list(default.time_units),
            time_unit_names=(
                list(default.time_unit_names) if default.time_unit_names else None
            ),
            format_strings=list(default.format_strings),
        )


def configure_defaults(**options: Any) -> None:
    """Configure default settings for sliders created afterwards.

    Accepts the same keys as :meth:`SliderConfig.from_options`.

    Example:
        from timeslider import configure_defaults

        configure_defaults(
            time_unit="day;month;year;decade",
            format_string="%d;%b;%Y;%Y",
            direction="right",
        )
    """
    updated = SliderConfig.from_options(options, base=get_default_config())
    global _default_config
    with _config_lock:
        _default_config = updated


def reset_config() -> None:
    """Reset default configuration. Useful for testing."""
    global _default_config
    with _config_lock:
        _default_config = SliderConfig()
