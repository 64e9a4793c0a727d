"""Result and warning records produced by the enclosure designer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class WarningKind(str, Enum):
    """Closed set of conditions reported alongside a design."""

    INFEASIBLE_ALIGNMENT = "infeasible_alignment"
    NEGATIVE_NET_VOLUME = "negative_net_volume"
    INVALID_DRIVER_PARAMETER = "invalid_driver_parameter"
    INVALID_TUNING_OPTION = "invalid_tuning_option"
    NON_PHYSICAL_PORT = "non_physical_port"
    PORT_VELOCITY_HIGH = "port_velocity_high"
    ALIGNMENT_EXTRAPOLATED = "alignment_extrapolated"


# Kinds that leave the result without a usable volume.
BLOCKING_KINDS = frozenset(
    {
        WarningKind.INFEASIBLE_ALIGNMENT,
        WarningKind.INVALID_DRIVER_PARAMETER,
        WarningKind.INVALID_TUNING_OPTION,
        WarningKind.NEGATIVE_NET_VOLUME,
    }
)


@dataclass(frozen=True, slots=True)
class DesignWarning:
    """A single structured warning attached to an :class:`EnclosureResult`.

    ``details`` may be passed as a mapping; it is stored as ``(name, value)``
    pairs so the warning stays immutable and hashable.
    """

    kind: WarningKind
    message: str
    details: tuple[tuple[str, float], ...] = ()

    def __post_init__(self) -> None:
        if isinstance(self.details, Mapping):
            object.__setattr__(self, "details", tuple(self.details.items()))
        else:
            object.__setattr__(self, "details", tuple((name, value) for name, value in self.details))

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True, slots=True)
class EnclosureResult:
    """Fully-populated enclosure design for one driver and topology."""

    topology: str
    """Name of the requested topology (e.g. ``"Sealed"``)."""

    net_volume_l: float = 0.0
    """Usable internal volume after displacements (litres)."""

    gross_volume_l: float = 0.0
    """Internal volume before driver, bracing and port displacement (litres)."""

    tuning_hz: float = 0.0
    """Corner frequency (sealed, bandpass) or tuning frequency (Hz)."""

    response: str = ""
    """Qualitative description of the low-frequency response."""

    port_length_cm: float = 0.0
    port_diameter_cm: float = 0.0
    air_velocity_ms: float = 0.0

    width_cm: float = 0.0
    height_cm: float = 0.0
    depth_cm: float = 0.0

    within_xmax: bool = True
    """Whether the stated displacement fits inside the linear excursion."""

    warnings: tuple[DesignWarning, ...] = ()

    alignment_alpha: float | None = None
    """Compliance ratio used for the alignment, ``None`` when it could not be computed."""

    chamber_volumes_l: tuple[float, ...] = ()
    """Per-chamber gross volumes for multi-chamber designs (front, rear)."""

    @property
    def warning_kinds(self) -> tuple[WarningKind, ...]:
        return tuple(warning.kind for warning in self.warnings)

    def has_warning(self, kind: WarningKind) -> bool:
        return any(warning.kind is kind for warning in self.warnings)

    @property
    def is_feasible(self) -> bool:
        """Return ``True`` when no warning invalidates the computed volume."""

        return not any(warning.kind in BLOCKING_KINDS for warning in self.warnings)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation of the design."""

        return {
            "topology": self.topology,
            "net_volume_l": self.net_volume_l,
            "gross_volume_l": self.gross_volume_l,
            "tuning_hz": self.tuning_hz,
            "response": self.response,
            "port_length_cm": self.port_length_cm,
            "port_diameter_cm": self.port_diameter_cm,
            "air_velocity_ms": self.air_velocity_ms,
            "width_cm": self.width_cm,
            "height_cm": self.height_cm,
            "depth_cm": self.depth_cm,
            "within_xmax": self.within_xmax,
            "warnings": [warning.to_dict() for warning in self.warnings],
            "alignment_alpha": self.alignment_alpha,
            "chamber_volumes_l": list(self.chamber_volumes_l),
        }


__all__ = ["WarningKind", "DesignWarning", "EnclosureResult", "BLOCKING_KINDS"]
