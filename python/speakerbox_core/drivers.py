"""Driver data model used across the enclosure designer."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields, replace

SPEED_OF_SOUND = 343.0  # m/s at 20°C


@dataclass(frozen=True, slots=True)
class DriverParameters:
    """Thiele/Small parameter set describing a single driver.

    Every field defaults to zero and nothing is validated on construction;
    the enclosure formulas report unusable values as design warnings.
    """

    fs_hz: float = 0.0
    """Free-air resonance frequency (Hz)."""

    qts: float = 0.0
    """Total Q at fs (dimensionless)."""

    vas_l: float = 0.0
    """Equivalent compliance volume (litres)."""

    re_ohm: float = 0.0
    """DC resistance of the voice coil (ohms)."""

    sd_cm2: float = 0.0
    """Effective piston area (square centimetres)."""

    xmax_mm: float = 0.0
    """One-way linear excursion limit (millimetres)."""

    vd_l: float = 0.0
    """Volume displaced by the driver at Xmax (litres)."""

    le_mh: float = 0.0
    """Voice-coil inductance (millihenries)."""

    cms_m_per_n: float = 0.0
    """Mechanical compliance of the suspension (m/N)."""

    mms_g: float = 0.0
    """Moving mass including air load (grams)."""

    bl_t_m: float = 0.0
    """Force factor (Tesla-metres)."""

    def linear_displacement_l(self) -> float:
        """Return the displaced volume implied by Sd and Xmax (litres)."""

        return self.sd_cm2 * self.xmax_mm / 1000.0

    def with_derived_displacement(self) -> DriverParameters:
        """Return a copy with ``vd_l`` filled from Sd/Xmax when it was left at zero."""

        if self.vd_l != 0.0:
            return self
        return replace(self, vd_l=self.linear_displacement_l())

    def invalid_fields(self, names: Iterable[str]) -> list[str]:
        """Return the subset of ``names`` whose values are not strictly positive."""

        # NaN fails the comparison as well
        return [name for name in names if not getattr(self, name) > 0.0]

    def to_dict(self) -> dict[str, float]:
        return {field.name: float(getattr(self, field.name)) for field in fields(self)}


DRIVER_FIELD_NAMES: tuple[str, ...] = tuple(field.name for field in fields(DriverParameters))


__all__ = ["DriverParameters", "DRIVER_FIELD_NAMES", "SPEED_OF_SOUND"]
