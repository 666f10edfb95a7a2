"""Timeslider - scrollable calendar values quantized onto calendar units."""

from timeslider.calendar import (
    UNIT_TABLE,
    CalendarFields,
    Unit,
    UnitSpec,
    add_units,
    cascade,
    from_fields,
    get_era_year,
    make_unit_spec,
    parse_unit,
    quantize,
    set_era_year,
    to_fields,
    units_to_approx_millis,
)
from timeslider.config import (
    Orientation,
    SliderConfig,
    configure_defaults,
    get_default_config,
    reset_config,
)
from timeslider.engine import ScrollEngine, ScrollSession
from timeslider.formatting import Formatter, StrftimeFormatter, resolve_tz
from timeslider.kinematics import FlingTrajectory
from timeslider.layout import TimeSliderLayout
from timeslider.logging import configure_logging, get_logger
from timeslider.scrollable import TimeScrollable, TimeScrollListener
from timeslider.slider import TimeSlider, VisibleItem
from timeslider.units import UnitCycle

__all__ = [
    # Primary API - hosts interact with sliders and layouts
    "TimeScrollable",
    "TimeScrollListener",
    "TimeSlider",
    "TimeSliderLayout",
    "VisibleItem",
    # Calendar arithmetic
    "CalendarFields",
    "Unit",
    "UnitSpec",
    "UNIT_TABLE",
    "add_units",
    "cascade",
    "from_fields",
    "get_era_year",
    "make_unit_spec",
    "parse_unit",
    "quantize",
    "set_era_year",
    "to_fields",
    "units_to_approx_millis",
    # Scrolling
    "FlingTrajectory",
    "ScrollEngine",
    "ScrollSession",
    "UnitCycle",
    # Formatting
    "Formatter",
    "StrftimeFormatter",
    "resolve_tz",
    # Config
    "Orientation",
    "SliderConfig",
    "configure_defaults",
    "get_default_config",
    "reset_config",
    # Logging
    "configure_logging",
    "get_logger",
]
__version__ = "0.1.0"
