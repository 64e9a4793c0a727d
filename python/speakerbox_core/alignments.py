"""Empirical alignment tables used by the transmission-line and passive-radiator formulas.

Only a handful of rows are tabulated so far. The lookups interpolate between
rows and report when a request falls outside the table, so extending an
alignment is a matter of adding rows here.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TaperAlignment:
    """One row of the quarter-wave line alignment table."""

    taper_ratio: float
    """Mouth area divided by closed-end area."""

    alpha: float
    """Compliance ratio Vas / Vb."""

    tuning_ratio: float
    """Line tuning frequency divided by driver Fs."""

    length_factor: float
    """Correction applied to the ideal quarter-wave length."""


@dataclass(frozen=True, slots=True)
class TaperLookup:
    """Result of a table lookup, flagged when the request was clamped."""

    alignment: TaperAlignment
    extrapolated: bool


@dataclass(frozen=True, slots=True)
class PassiveRadiatorAlignment:
    """Tabulated passive-radiator alignment."""

    tuning_ratio: float
    """System tuning frequency divided by driver Fs."""

    def alpha(self, delta: float) -> float:
        # Only the delta == alpha case is tabulated.
        return delta


TRANSMISSION_LINE_TABLE: tuple[TaperAlignment, ...] = (
    TaperAlignment(taper_ratio=0.1, alpha=1.5198, tuning_ratio=1.0, length_factor=0.62),
    TaperAlignment(taper_ratio=1.0, alpha=1.5198, tuning_ratio=1.0, length_factor=1.0),
)

PASSIVE_RADIATOR_ALIGNMENT = PassiveRadiatorAlignment(tuning_ratio=1.51)


def lookup_taper(
    taper_ratio: float,
    table: Sequence[TaperAlignment] = TRANSMISSION_LINE_TABLE,
) -> TaperLookup:
    """Return the alignment for ``taper_ratio``.

    Values between rows are linearly interpolated. Values outside the table are
    clamped to the nearest row and flagged as extrapolated.
    """

    if not table:
        raise ValueError("Alignment table is empty")

    rows = sorted(table, key=lambda row: row.taper_ratio)
    first, last = rows[0], rows[-1]
    if taper_ratio <= first.taper_ratio:
        return TaperLookup(first, extrapolated=taper_ratio < first.taper_ratio)
    if taper_ratio >= last.taper_ratio:
        return TaperLookup(last, extrapolated=taper_ratio > last.taper_ratio)

    for lower, upper in zip(rows, rows[1:]):
        if lower.taper_ratio <= taper_ratio <= upper.taper_ratio:
            span = upper.taper_ratio - lower.taper_ratio
            ratio = (taper_ratio - lower.taper_ratio) / span if span else 0.0
            return TaperLookup(
                TaperAlignment(
                    taper_ratio=taper_ratio,
                    alpha=_lerp(lower.alpha, upper.alpha, ratio),
                    tuning_ratio=_lerp(lower.tuning_ratio, upper.tuning_ratio, ratio),
                    length_factor=_lerp(lower.length_factor, upper.length_factor, ratio),
                ),
                extrapolated=False,
            )

    return TaperLookup(last, extrapolated=True)  # pragma: no cover - rows are sorted


def _lerp(a: float, b: float, ratio: float) -> float:
    return a + ratio * (b - a)


__all__ = [
    "TaperAlignment",
    "TaperLookup",
    "PassiveRadiatorAlignment",
    "TRANSMISSION_LINE_TABLE",
    "PASSIVE_RADIATOR_ALIGNMENT",
    "lookup_taper",
]
