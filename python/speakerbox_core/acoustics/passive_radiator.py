"""Passive-radiator alignment.

The radiator itself is not modelled beyond its compliance ratio, so the
result carries no port geometry.
"""

from __future__ import annotations

from ..alignments import PASSIVE_RADIATOR_ALIGNMENT, PassiveRadiatorAlignment
from ..drivers import DriverParameters
from ..results import DesignWarning, EnclosureResult
from ..topologies import EnclosureTopology, PassiveRadiator
from ._utils import assemble_result, infeasible_warning, invalid_driver_warnings, rejected_result, usable_alpha

PASSIVE_RADIATOR_RESPONSE = "Similar to ported, 24 dB/octave roll-off below Fb"


class PassiveRadiatorBoxAlignment:
    """Box volume and tuning for a passive-radiator system."""

    required_fields = ("fs_hz", "vas_l")

    def __init__(
        self,
        driver: DriverParameters,
        config: PassiveRadiator | None = None,
        table: PassiveRadiatorAlignment = PASSIVE_RADIATOR_ALIGNMENT,
    ) -> None:
        self.driver = driver
        self.config = config or PassiveRadiator()
        self.table = table

    def alpha(self) -> float:
        return self.table.alpha(self.config.delta)

    def tuning_frequency(self) -> float:
        return self.table.tuning_ratio * self.driver.fs_hz

    def design(self) -> EnclosureResult:
        name = EnclosureTopology.PASSIVE_RADIATOR.value
        warnings: list[DesignWarning] = invalid_driver_warnings(self.driver, self.required_fields)
        if warnings:
            return rejected_result(name, PASSIVE_RADIATOR_RESPONSE, self.driver, warnings)

        alpha = self.alpha()
        if not usable_alpha(alpha):
            reason = f"compliance ratio delta {self.config.delta:g} must be positive"
            return rejected_result(
                name, PASSIVE_RADIATOR_RESPONSE, self.driver, [infeasible_warning(alpha, reason)], alpha=alpha
            )

        return assemble_result(
            name,
            self.driver,
            gross_volume_l=self.driver.vas_l / alpha,
            tuning_hz=self.tuning_frequency(),
            response=PASSIVE_RADIATOR_RESPONSE,
            alpha=alpha,
            warnings=warnings,
        )


__all__ = ["PassiveRadiatorBoxAlignment", "PASSIVE_RADIATOR_RESPONSE"]
