"""Vented (bass-reflex) alignment with a single round port."""

from __future__ import annotations

from ..drivers import DriverParameters
from ..results import DesignWarning, EnclosureResult
from ..topologies import EnclosureTopology, Ported
from ._utils import (
    assemble_result,
    infeasible_warning,
    invalid_driver_warnings,
    invalid_option_warning,
    rejected_result,
    solve_port,
    usable_alpha,
)

VENTED_RESPONSE = "24 dB/octave roll-off below Fb"
SINGLE_PORT_CONSTANT = 23562.5


class VentedBoxAlignment:
    """Approximate B4-style sizing of a ported enclosure for a target Fb."""

    required_fields = ("fs_hz", "vas_l")

    def __init__(self, driver: DriverParameters, config: Ported | None = None) -> None:
        self.driver = driver
        self.config = config or Ported()

    def tuning_frequency(self) -> float:
        """Return the requested tuning frequency (Fb)."""

        return self.config.tuning_hz(self.driver)

    def alpha(self) -> float:
        ratio = self.driver.fs_hz / self.tuning_frequency()
        return ratio * ratio - 1.0

    def box_volume_l(self, alpha: float) -> float:
        return self.driver.vas_l / alpha

    def design(self) -> EnclosureResult:
        name = EnclosureTopology.PORTED.value
        warnings: list[DesignWarning] = invalid_driver_warnings(self.driver, self.required_fields)
        fb = self.tuning_frequency()
        if not fb > 0.0:
            warnings.append(invalid_option_warning("fb", fb))
        if warnings:
            return rejected_result(name, VENTED_RESPONSE, self.driver, warnings)

        alpha = self.alpha()
        if not usable_alpha(alpha):
            reason = f"tuning {fb:g} Hz must lie below driver Fs {self.driver.fs_hz:g} Hz"
            return rejected_result(
                name, VENTED_RESPONSE, self.driver, [infeasible_warning(alpha, reason)], alpha=alpha
            )

        volume = self.box_volume_l(alpha)
        port = solve_port(self.driver, volume, fb, SINGLE_PORT_CONSTANT, warnings)
        return assemble_result(
            name,
            self.driver,
            gross_volume_l=volume,
            tuning_hz=fb,
            response=VENTED_RESPONSE,
            alpha=alpha,
            warnings=warnings,
            port=port,
        )


__all__ = ["VentedBoxAlignment", "VENTED_RESPONSE", "SINGLE_PORT_CONSTANT"]
