"""Utility helpers shared across the enclosure formula sets."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from math import isfinite, pi

from ..drivers import DriverParameters
from ..results import DesignWarning, EnclosureResult, WarningKind

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

BRACING_ALLOWANCE_L = 0.5
DEFAULT_PORT_DIAMETER_CM = 5.0
PORT_END_CORRECTION = 0.85  # multiplied by the port diameter
PORT_VELOCITY_LIMIT_MS = 17.0  # ~5% of the speed of sound, onset of audible chuffing

# Cabinet proportions applied to the cube root of the net volume.
CABINET_WIDTH_RATIO = 1.0
CABINET_HEIGHT_RATIO = 1.6
CABINET_DEPTH_RATIO = 0.6


@dataclass(frozen=True, slots=True)
class PortSizing:
    """Round port solved from the Helmholtz relation."""

    diameter_cm: float
    length_cm: float
    air_velocity_ms: float

    def volume_l(self) -> float:
        return port_volume_l(self.diameter_cm, self.length_cm)


def helmholtz_port_length_cm(
    volume_l: float,
    tuning_hz: float,
    diameter_cm: float,
    constant: float,
) -> float | None:
    """Return the port length (cm) tuning ``volume_l`` to ``tuning_hz``.

    ``L = K * r^2 / (f^2 * V) - 0.85 * D``. Returns ``None`` when the volume or
    frequency leaves the relation undefined or the length is not finite.
    """

    if not (volume_l > 0.0 and tuning_hz > 0.0):
        return None
    radius = diameter_cm / 2.0
    denominator = tuning_hz * tuning_hz * volume_l
    if not (denominator > 0.0 and isfinite(denominator)):
        return None
    length = (constant * radius * radius) / denominator - PORT_END_CORRECTION * diameter_cm
    return length if isfinite(length) else None


def port_volume_l(diameter_cm: float, length_cm: float) -> float:
    """Return the air volume occupied by a round port (litres)."""

    radius = diameter_cm / 2.0
    return pi * radius**2 * length_cm / 1000.0


def port_air_velocity_ms(sd_cm2: float, xmax_mm: float, tuning_hz: float, diameter_cm: float) -> float:
    """Estimate peak port air velocity for a cone moving Xmax at the tuning frequency.

    ``v = Sd * Xmax * 2*pi*f / Ap`` in SI units. Missing data yields zero.
    """

    radius_m = diameter_cm / 200.0
    area_m2 = pi * radius_m**2
    if area_m2 <= 0.0 or sd_cm2 <= 0.0 or xmax_mm <= 0.0 or tuning_hz <= 0.0:
        return 0.0
    volume_velocity = (sd_cm2 / 1.0e4) * (xmax_mm / 1000.0) * 2 * pi * tuning_hz
    return volume_velocity / area_m2


def solve_port(
    driver: DriverParameters,
    volume_l: float,
    tuning_hz: float,
    constant: float,
    warnings: list[DesignWarning],
    *,
    diameter_cm: float = DEFAULT_PORT_DIAMETER_CM,
) -> PortSizing | None:
    """Size a port for the given chamber, appending warnings for unusable results.

    A non-positive length means the chamber is already too small for a port of
    this diameter; the port is dropped rather than reported with a negative length.
    """

    length = helmholtz_port_length_cm(volume_l, tuning_hz, diameter_cm, constant)
    if length is None or not length > 0.0:
        warnings.append(
            DesignWarning(
                WarningKind.NON_PHYSICAL_PORT,
                f"No positive port length exists for a {diameter_cm:g} cm port at {tuning_hz:.1f} Hz",
                {"diameter_cm": diameter_cm, "length_cm": length if length is not None else 0.0},
            )
        )
        return None

    velocity = port_air_velocity_ms(driver.sd_cm2, driver.xmax_mm, tuning_hz, diameter_cm)
    if isfinite(velocity) and velocity > PORT_VELOCITY_LIMIT_MS:
        warnings.append(
            DesignWarning(
                WarningKind.PORT_VELOCITY_HIGH,
                f"Port air velocity {velocity:.1f} m/s exceeds {PORT_VELOCITY_LIMIT_MS:g} m/s",
                {"air_velocity_ms": velocity, "limit_ms": PORT_VELOCITY_LIMIT_MS},
            )
        )
    return PortSizing(diameter_cm=diameter_cm, length_cm=length, air_velocity_ms=velocity)


def net_volume_l(gross_volume_l: float, driver: DriverParameters, port_volume: float = 0.0) -> float:
    """Subtract driver, bracing and port displacement from the gross volume."""

    return gross_volume_l - driver.vd_l - BRACING_ALLOWANCE_L - port_volume


def cabinet_dimensions_cm(volume_l: float) -> tuple[float, float, float]:
    """Return (width, height, depth) in centimetres for ``volume_l`` of net volume.

    Non-positive volumes have no physical cabinet and map to zeros.
    """

    if not volume_l > 0.0:
        return (0.0, 0.0, 0.0)
    cube_root = (volume_l * 1000.0) ** (1.0 / 3.0)
    return (
        cube_root * CABINET_WIDTH_RATIO,
        cube_root * CABINET_HEIGHT_RATIO,
        cube_root * CABINET_DEPTH_RATIO,
    )


def within_linear_excursion(driver: DriverParameters) -> bool:
    """Return ``False`` only when the stated Vd exceeds what Sd and Xmax allow."""

    linear = driver.linear_displacement_l()
    if linear <= 0.0:
        return True
    return driver.vd_l <= linear * (1.0 + 1e-9)


def usable_alpha(alpha: float) -> bool:
    """Return ``True`` for a positive, finite compliance ratio."""

    return alpha > 0.0 and isfinite(alpha)


def _finite_details(**values: float) -> dict[str, float]:
    # NaN and infinities have no JSON encoding.
    return {name: value for name, value in values.items() if isfinite(value)}


def invalid_driver_warnings(driver: DriverParameters, required: Sequence[str]) -> list[DesignWarning]:
    return [
        DesignWarning(
            WarningKind.INVALID_DRIVER_PARAMETER,
            f"Driver parameter {name} must be positive (got {getattr(driver, name)!r})",
            _finite_details(**{name: float(getattr(driver, name))}),
        )
        for name in driver.invalid_fields(required)
    ]


def invalid_option_warning(name: str, value: float) -> DesignWarning:
    return DesignWarning(
        WarningKind.INVALID_TUNING_OPTION,
        f"Tuning option {name} must be positive (got {value!r})",
        _finite_details(**{name: float(value)}),
    )


def infeasible_warning(alpha: float, reason: str) -> DesignWarning:
    if not isfinite(alpha):
        reason = "compliance ratio is not finite for these driver parameters"
    return DesignWarning(
        WarningKind.INFEASIBLE_ALIGNMENT,
        f"Invalid alpha ({alpha:.4g}): {reason}",
        _finite_details(alpha=alpha),
    )


def rejected_result(
    topology: str,
    response: str,
    driver: DriverParameters,
    warnings: Sequence[DesignWarning],
    *,
    alpha: float | None = None,
) -> EnclosureResult:
    """Return the zero-valued result used when no valid volume exists."""

    if alpha is not None and not isfinite(alpha):
        alpha = None
    return EnclosureResult(
        topology=topology,
        response=response,
        within_xmax=within_linear_excursion(driver),
        warnings=tuple(warnings),
        alignment_alpha=alpha,
    )


def assemble_result(
    topology: str,
    driver: DriverParameters,
    *,
    gross_volume_l: float,
    tuning_hz: float,
    response: str,
    alpha: float,
    warnings: list[DesignWarning],
    port: PortSizing | None = None,
    line_length_cm: float = 0.0,
    chamber_volumes_l: tuple[float, ...] = (),
) -> EnclosureResult:
    """Apply displacement subtraction and cabinet sizing, then build the result.

    Inputs large enough to overflow any derived quantity reject the design
    instead of reporting infinite volumes or dimensions.
    """

    port_volume = port.volume_l() if port is not None else 0.0
    net = net_volume_l(gross_volume_l, driver, port_volume)
    width, height, depth = cabinet_dimensions_cm(net)

    if port is not None:
        port_length, port_diameter, velocity = port.length_cm, port.diameter_cm, port.air_velocity_ms
    else:
        port_length, port_diameter, velocity = line_length_cm, 0.0, 0.0

    derived = {
        "gross_volume_l": gross_volume_l,
        "net_volume_l": net,
        "tuning_hz": tuning_hz,
        "port_length_cm": port_length,
        "air_velocity_ms": velocity,
        "width_cm": width,
        "height_cm": height,
        "depth_cm": depth,
    }
    overflowed = [name for name, value in derived.items() if not isfinite(value)]
    overflowed += ["chamber_volumes_l"] if not all(map(isfinite, chamber_volumes_l)) else []
    if overflowed:
        names = ", ".join(overflowed)
        logger.debug("Rejecting %s design with non-finite %s", topology, names)
        warnings.append(infeasible_warning(alpha, f"{names} not finite for these driver parameters"))
        return rejected_result(topology, response, driver, warnings, alpha=alpha)

    if not net > 0.0:
        warnings.append(
            DesignWarning(
                WarningKind.NEGATIVE_NET_VOLUME,
                f"Net volume {net:.2f} L is not positive after internal displacements",
                {"gross_volume_l": gross_volume_l, "net_volume_l": net},
            )
        )

    return EnclosureResult(
        topology=topology,
        net_volume_l=net,
        gross_volume_l=gross_volume_l,
        tuning_hz=tuning_hz,
        response=response,
        port_length_cm=port_length,
        port_diameter_cm=port_diameter,
        air_velocity_ms=velocity,
        width_cm=width,
        height_cm=height,
        depth_cm=depth,
        within_xmax=within_linear_excursion(driver),
        warnings=tuple(warnings),
        alignment_alpha=alpha,
        chamber_volumes_l=chamber_volumes_l,
    )


__all__ = [
    "BRACING_ALLOWANCE_L",
    "DEFAULT_PORT_DIAMETER_CM",
    "PORT_VELOCITY_LIMIT_MS",
    "PortSizing",
    "helmholtz_port_length_cm",
    "port_volume_l",
    "port_air_velocity_ms",
    "solve_port",
    "net_volume_l",
    "cabinet_dimensions_cm",
    "within_linear_excursion",
    "usable_alpha",
    "invalid_driver_warnings",
    "invalid_option_warning",
    "infeasible_warning",
    "assemble_result",
    "rejected_result",
]
