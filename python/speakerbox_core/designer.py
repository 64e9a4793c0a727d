"""Entry point mapping a driver and a topology to a complete enclosure design."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Literal

from .acoustics import (
    BandpassBoxAlignment,
    PassiveRadiatorBoxAlignment,
    SealedBoxAlignment,
    TransmissionLineAlignment,
    VentedBoxAlignment,
)
from .drivers import DriverParameters
from .results import EnclosureResult
from .topologies import (
    Bandpass,
    EnclosureTopology,
    PassiveRadiator,
    Ported,
    Sealed,
    TopologyConfig,
    TransmissionLine,
    resolve_topology,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

Recommendation = Literal["Sealed", "Ported", "Other"]

_FORMULAS: dict[type, Callable[[DriverParameters, TopologyConfig], EnclosureResult]] = {
    Sealed: lambda driver, config: SealedBoxAlignment(driver, config).design(),
    Ported: lambda driver, config: VentedBoxAlignment(driver, config).design(),
    Bandpass: lambda driver, config: BandpassBoxAlignment(driver, config).design(),
    TransmissionLine: lambda driver, config: TransmissionLineAlignment(driver, config).design(),
    PassiveRadiator: lambda driver, config: PassiveRadiatorBoxAlignment(driver, config).design(),
}


class EnclosureDesigner:
    """Stateless enclosure calculator.

    Instances hold no per-call state and can be shared freely between threads;
    every call builds a fresh :class:`EnclosureResult`.
    """

    def recommend(self, qts: float) -> Recommendation:
        """Suggest a topology from the driver's total Q alone."""

        return recommend(qts)

    def design(
        self,
        params: DriverParameters,
        topology: TopologyConfig | EnclosureTopology | str,
        options: Mapping[str, float] | None = None,
    ) -> EnclosureResult:
        """Return the enclosure design for ``params`` in the requested topology.

        Physically infeasible or degenerate inputs are reported through the
        result's warnings. An unknown topology raises
        :class:`~speakerbox_core.errors.UnsupportedTopologyError`.
        """

        config = resolve_topology(topology, options)
        formula = _FORMULAS[type(config)]
        result = formula(params, config)
        logger.debug(
            "Designed %s enclosure: net %.3f L, tuning %.2f Hz",
            result.topology,
            result.net_volume_l,
            result.tuning_hz,
        )
        for warning in result.warnings:
            logger.info("%s design warning [%s]: %s", result.topology, warning.kind.value, warning.message)
        return result


def recommend(qts: float) -> Recommendation:
    """Return ``"Ported"`` below Qts 0.4, ``"Sealed"`` up to 0.6, ``"Other"`` above."""

    if qts < 0.4:
        return "Ported"
    if 0.4 <= qts <= 0.6:
        return "Sealed"
    return "Other"


_DEFAULT_DESIGNER = EnclosureDesigner()


def design(
    params: DriverParameters,
    topology: TopologyConfig | EnclosureTopology | str,
    options: Mapping[str, float] | None = None,
) -> EnclosureResult:
    """Module-level shortcut for :meth:`EnclosureDesigner.design`."""

    return _DEFAULT_DESIGNER.design(params, topology, options)


__all__ = ["EnclosureDesigner", "Recommendation", "design", "recommend"]
