"""Quarter-wave transmission-line alignment driven by the taper-ratio table."""

from __future__ import annotations

from ..alignments import TaperLookup, lookup_taper
from ..drivers import SPEED_OF_SOUND, DriverParameters
from ..results import DesignWarning, EnclosureResult, WarningKind
from ..topologies import EnclosureTopology, TransmissionLine
from ._utils import (
    assemble_result,
    infeasible_warning,
    invalid_driver_warnings,
    invalid_option_warning,
    rejected_result,
    usable_alpha,
)

TRANSMISSION_LINE_RESPONSE = "Quarter-wave line loading, roughly 18 dB/octave roll-off below Fb"


class TransmissionLineAlignment:
    """Line volume, tuning and physical length from tabulated alignments."""

    required_fields = ("fs_hz", "vas_l")

    def __init__(self, driver: DriverParameters, config: TransmissionLine | None = None) -> None:
        self.driver = driver
        self.config = config or TransmissionLine()

    def lookup(self) -> TaperLookup:
        return lookup_taper(self.config.taper_ratio)

    def line_length_cm(self, tuning_hz: float, length_factor: float) -> float:
        """Return the physical line length for a quarter wave at ``tuning_hz``."""

        return length_factor * SPEED_OF_SOUND / (4.0 * tuning_hz) * 100.0

    def design(self) -> EnclosureResult:
        name = EnclosureTopology.TRANSMISSION_LINE.value
        warnings: list[DesignWarning] = invalid_driver_warnings(self.driver, self.required_fields)
        if not self.config.taper_ratio > 0.0:
            warnings.append(invalid_option_warning("tr", self.config.taper_ratio))
        if warnings:
            return rejected_result(name, TRANSMISSION_LINE_RESPONSE, self.driver, warnings)

        lookup = self.lookup()
        row = lookup.alignment
        if lookup.extrapolated:
            warnings.append(
                DesignWarning(
                    WarningKind.ALIGNMENT_EXTRAPOLATED,
                    f"Taper ratio {self.config.taper_ratio:g} is outside the alignment table; "
                    f"using the {row.taper_ratio:g} entry",
                    {"requested": self.config.taper_ratio, "used": row.taper_ratio},
                )
            )

        alpha = row.alpha
        if not usable_alpha(alpha):
            return rejected_result(
                name,
                TRANSMISSION_LINE_RESPONSE,
                self.driver,
                [*warnings, infeasible_warning(alpha, "tabulated alignment has no valid volume")],
                alpha=alpha,
            )

        fb = row.tuning_ratio * self.driver.fs_hz
        return assemble_result(
            name,
            self.driver,
            gross_volume_l=self.driver.vas_l / alpha,
            tuning_hz=fb,
            response=TRANSMISSION_LINE_RESPONSE,
            alpha=alpha,
            warnings=warnings,
            line_length_cm=self.line_length_cm(fb, row.length_factor),
        )


__all__ = ["TransmissionLineAlignment", "TRANSMISSION_LINE_RESPONSE"]
