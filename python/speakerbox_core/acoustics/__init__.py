"""Enclosure formula sets, one module per topology."""

from .bandpass import BandpassBoxAlignment
from .passive_radiator import PassiveRadiatorBoxAlignment
from .sealed import SealedBoxAlignment
from .transmission_line import TransmissionLineAlignment
from .vented import VentedBoxAlignment

__all__ = [
    "SealedBoxAlignment",
    "VentedBoxAlignment",
    "BandpassBoxAlignment",
    "TransmissionLineAlignment",
    "PassiveRadiatorBoxAlignment",
]
