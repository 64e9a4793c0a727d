"""Fourth-order bandpass alignment (sealed rear chamber, ported front chamber)."""

from __future__ import annotations

from ..drivers import DriverParameters
from ..results import DesignWarning, EnclosureResult
from ..topologies import Bandpass, EnclosureTopology
from ._utils import (
    assemble_result,
    infeasible_warning,
    invalid_driver_warnings,
    invalid_option_warning,
    rejected_result,
    solve_port,
    usable_alpha,
)

BANDPASS_RESPONSE = "Bandpass response, 12 dB/octave slopes either side of Fc"
# Front-chamber port constant; four times the single-port value (doubled-port convention).
BANDPASS_PORT_CONSTANT = 94250.0


class BandpassBoxAlignment:
    """Sizing of a 4th-order bandpass box from the volume ratio ``s``."""

    required_fields = ("fs_hz", "qts", "vas_l")

    def __init__(self, driver: DriverParameters, config: Bandpass | None = None) -> None:
        self.driver = driver
        self.config = config or Bandpass()

    def passband_q(self) -> float:
        """Return Qbp = 1 / (2s)."""

        return 1.0 / (2.0 * self.config.s)

    def alpha(self) -> float:
        """Return the rear-chamber compliance ratio (Qbp/Qts)^2 - 1."""

        ratio = self.passband_q() / self.driver.qts
        return ratio * ratio - 1.0

    def front_volume_l(self) -> float:
        scale = 2.0 * self.config.s * self.driver.qts
        return scale * scale * self.driver.vas_l

    def rear_volume_l(self, alpha: float) -> float:
        return self.driver.vas_l / alpha

    def center_frequency(self) -> float:
        return self.passband_q() * (self.driver.fs_hz / self.driver.qts)

    def design(self) -> EnclosureResult:
        name = EnclosureTopology.BANDPASS.value
        warnings: list[DesignWarning] = invalid_driver_warnings(self.driver, self.required_fields)
        if not self.config.s > 0.0:
            warnings.append(invalid_option_warning("s", self.config.s))
        if warnings:
            return rejected_result(name, BANDPASS_RESPONSE, self.driver, warnings)

        alpha = self.alpha()
        if not usable_alpha(alpha):
            reason = f"passband Q {self.passband_q():.3g} must exceed driver Qts {self.driver.qts:g}"
            return rejected_result(
                name, BANDPASS_RESPONSE, self.driver, [infeasible_warning(alpha, reason)], alpha=alpha
            )

        front = self.front_volume_l()
        rear = self.rear_volume_l(alpha)
        fc = self.center_frequency()
        port = solve_port(self.driver, front, fc, BANDPASS_PORT_CONSTANT, warnings)
        return assemble_result(
            name,
            self.driver,
            gross_volume_l=front + rear,
            tuning_hz=fc,
            response=BANDPASS_RESPONSE,
            alpha=alpha,
            warnings=warnings,
            port=port,
            chamber_volumes_l=(front, rear),
        )


__all__ = ["BandpassBoxAlignment", "BANDPASS_RESPONSE", "BANDPASS_PORT_CONSTANT"]
