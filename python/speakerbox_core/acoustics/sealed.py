"""Sealed-box (acoustic suspension) alignment.

The box volume follows from the classic compliance ratio
``alpha = (Qtc / Qts)^2 - 1``: the enclosed air must stiffen the suspension
enough to raise the driver's Q to the requested system Q.
"""

from __future__ import annotations

from math import sqrt

from ..drivers import DriverParameters
from ..results import DesignWarning, EnclosureResult
from ..topologies import EnclosureTopology, Sealed
from ._utils import (
    assemble_result,
    infeasible_warning,
    invalid_driver_warnings,
    invalid_option_warning,
    rejected_result,
    usable_alpha,
)

SEALED_RESPONSE = "12 dB/octave roll-off below Fc"


class SealedBoxAlignment:
    """Closed-form sizing of a sealed enclosure for a target Qtc."""

    required_fields = ("fs_hz", "qts", "vas_l")

    def __init__(self, driver: DriverParameters, config: Sealed | None = None) -> None:
        self.driver = driver
        self.config = config or Sealed()

    def alpha(self) -> float:
        """Return the compliance ratio Vas/Vb for the target Qtc."""

        ratio = self.config.qtc / self.driver.qts
        return ratio * ratio - 1.0

    def box_volume_l(self, alpha: float) -> float:
        return self.driver.vas_l / alpha

    def corner_frequency(self, alpha: float) -> float:
        """Return Fc of the boxed driver."""

        return self.driver.fs_hz * sqrt(1.0 + alpha)

    def design(self) -> EnclosureResult:
        name = EnclosureTopology.SEALED.value
        warnings: list[DesignWarning] = invalid_driver_warnings(self.driver, self.required_fields)
        if not self.config.qtc > 0.0:
            warnings.append(invalid_option_warning("qtc", self.config.qtc))
        if warnings:
            return rejected_result(name, SEALED_RESPONSE, self.driver, warnings)

        alpha = self.alpha()
        if not usable_alpha(alpha):
            reason = f"target Qtc {self.config.qtc:g} must exceed driver Qts {self.driver.qts:g}"
            return rejected_result(
                name, SEALED_RESPONSE, self.driver, [infeasible_warning(alpha, reason)], alpha=alpha
            )

        return assemble_result(
            name,
            self.driver,
            gross_volume_l=self.box_volume_l(alpha),
            tuning_hz=self.corner_frequency(alpha),
            response=SEALED_RESPONSE,
            alpha=alpha,
            warnings=warnings,
        )


__all__ = ["SealedBoxAlignment", "SEALED_RESPONSE"]
