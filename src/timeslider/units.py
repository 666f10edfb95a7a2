"""Ordered cycle of scroll units for a single slider."""

from typing import Sequence

from timeslider.calendar import UnitSpec, make_unit_spec
from timeslider.config import SliderConfig


class UnitCycle:
    """Ordered, non-empty sequence of UnitSpecs with a current index.

    ``advance`` and ``reset`` are the only mutators and both keep the index
    inside ``[0, len)``.
    """

    def __init__(self, specs: Sequence[UnitSpec]) -> None:
        if not specs:
            raise ValueError("UnitCycle requires at least one unit")
        self._specs = tuple(specs)
        self._index = 0

    @classmethod
    def from_names(
        cls,
        units: Sequence[str],
        display_names: Sequence[str | None] | None = None,
        patterns: Sequence[str | None] | None = None,
    ) -> "UnitCycle":
        """Build a cycle from parallel name lists.

        Display names and patterns are looked up modulo their own length, so
        lists of unequal length still produce a usable mapping.
        """
        display_names = list(display_names or [None])
        patterns = list(patterns or [None])
        specs = [
            make_unit_spec(
                name,
                display_names[i % len(display_names)],
                patterns[i % len(patterns)],
            )
            for i, name in enumerate(units)
        ]
        return cls(specs)

    @classmethod
    def from_config(cls, config: SliderConfig) -> "UnitCycle":
        return cls.from_names(
            config.time_units, config.display_names, config.format_strings
        )

    def __len__(self) -> int:
        return len(self._specs)

    @property
    def index(self) -> int:
        return self._index

    @property
    def specs(self) -> tuple[UnitSpec, ...]:
        return self._specs

    def current(self) -> UnitSpec:
        return self._specs[self._index]

    def next(self) -> UnitSpec:
        return self._specs[(self._index + 1) % len(self._specs)]

    def advance(self) -> UnitSpec:
        """Move to the next unit, wrapping, and return it."""
        self._index = (self._index + 1) % len(self._specs)
        return self.current()

    def reset(self) -> None:
        self._index = 0
