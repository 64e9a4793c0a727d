"""Enclosure topologies and their per-topology tuning configuration.

Each topology is a small frozen dataclass holding exactly the tuning value it
needs. Defaults are resolved here, at the call boundary, so the formula sets
never look up loosely typed option keys themselves.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from .drivers import DriverParameters
from .errors import UnsupportedTopologyError


class EnclosureTopology(str, Enum):
    """Closed set of supported enclosure topologies."""

    SEALED = "Sealed"
    PORTED = "Ported"
    BANDPASS = "Bandpass"
    TRANSMISSION_LINE = "TransmissionLine"
    PASSIVE_RADIATOR = "PassiveRadiator"


@dataclass(frozen=True, slots=True)
class Sealed:
    """Acoustic-suspension box tuned for a target system Q."""

    kind: ClassVar[EnclosureTopology] = EnclosureTopology.SEALED
    option_key: ClassVar[str] = "qtc"

    qtc: float = 0.707
    """Target system Q (Qtc)."""

    @classmethod
    def from_options(cls, options: Mapping[str, float]) -> Sealed:
        if "qtc" in options:
            return cls(qtc=float(options["qtc"]))
        return cls()


@dataclass(frozen=True, slots=True)
class Ported:
    """Bass-reflex box with a single round port."""

    kind: ClassVar[EnclosureTopology] = EnclosureTopology.PORTED
    option_key: ClassVar[str] = "fb"

    fb_hz: float | None = None
    """Target tuning frequency (Hz). ``None`` tunes to the driver's Fs."""

    @classmethod
    def from_options(cls, options: Mapping[str, float]) -> Ported:
        if "fb" in options:
            return cls(fb_hz=float(options["fb"]))
        return cls()

    def tuning_hz(self, driver: DriverParameters) -> float:
        """Return the requested tuning, falling back to the driver resonance."""

        if self.fb_hz is None:
            return driver.fs_hz
        return self.fb_hz


@dataclass(frozen=True, slots=True)
class Bandpass:
    """Fourth-order bandpass box (sealed rear chamber, ported front chamber)."""

    kind: ClassVar[EnclosureTopology] = EnclosureTopology.BANDPASS
    option_key: ClassVar[str] = "s"

    s: float = 0.6
    """Passband ripple / volume ratio parameter."""

    @classmethod
    def from_options(cls, options: Mapping[str, float]) -> Bandpass:
        if "s" in options:
            return cls(s=float(options["s"]))
        return cls()


@dataclass(frozen=True, slots=True)
class TransmissionLine:
    """Quarter-wave transmission line."""

    kind: ClassVar[EnclosureTopology] = EnclosureTopology.TRANSMISSION_LINE
    option_key: ClassVar[str] = "tr"

    taper_ratio: float = 1.0
    """Ratio of mouth area to closed-end area (1.0 is a straight line)."""

    @classmethod
    def from_options(cls, options: Mapping[str, float]) -> TransmissionLine:
        if "tr" in options:
            return cls(taper_ratio=float(options["tr"]))
        return cls()


@dataclass(frozen=True, slots=True)
class PassiveRadiator:
    """Sealed box loaded by an undriven passive radiator."""

    kind: ClassVar[EnclosureTopology] = EnclosureTopology.PASSIVE_RADIATOR
    option_key: ClassVar[str] = "delta"

    delta: float = 1.0
    """Compliance ratio between the driver and the passive radiator."""

    @classmethod
    def from_options(cls, options: Mapping[str, float]) -> PassiveRadiator:
        if "delta" in options:
            return cls(delta=float(options["delta"]))
        return cls()


TopologyConfig = Union[Sealed, Ported, Bandpass, TransmissionLine, PassiveRadiator]

TOPOLOGY_CONFIGS: dict[EnclosureTopology, type[TopologyConfig]] = {
    EnclosureTopology.SEALED: Sealed,
    EnclosureTopology.PORTED: Ported,
    EnclosureTopology.BANDPASS: Bandpass,
    EnclosureTopology.TRANSMISSION_LINE: TransmissionLine,
    EnclosureTopology.PASSIVE_RADIATOR: PassiveRadiator,
}

_NAME_LOOKUP: dict[str, EnclosureTopology] = {
    member.value.lower(): member for member in EnclosureTopology
}


def parse_topology(value: EnclosureTopology | str) -> EnclosureTopology:
    """Return the topology named by ``value``.

    Names are matched case-insensitively with spaces, hyphens and underscores
    ignored, so ``"transmission-line"`` and ``"Transmission Line"`` both work.
    """

    if isinstance(value, EnclosureTopology):
        return value
    if isinstance(value, str):
        key = value.replace(" ", "").replace("_", "").replace("-", "").lower()
        member = _NAME_LOOKUP.get(key)
        if member is not None:
            return member
    raise UnsupportedTopologyError(value)


def resolve_topology(
    topology: TopologyConfig | EnclosureTopology | str,
    options: Mapping[str, float] | None = None,
) -> TopologyConfig:
    """Return a fully-populated topology configuration.

    Configuration instances are returned unchanged. Topology names or enum
    members are combined with ``options``; keys a topology does not use are
    ignored and missing keys fall back to the documented defaults.
    """

    if isinstance(topology, (Sealed, Ported, Bandpass, TransmissionLine, PassiveRadiator)):
        return topology
    config_cls = TOPOLOGY_CONFIGS[parse_topology(topology)]
    return config_cls.from_options(options or {})


__all__ = [
    "EnclosureTopology",
    "Sealed",
    "Ported",
    "Bandpass",
    "TransmissionLine",
    "PassiveRadiator",
    "TopologyConfig",
    "TOPOLOGY_CONFIGS",
    "parse_topology",
    "resolve_topology",
]
