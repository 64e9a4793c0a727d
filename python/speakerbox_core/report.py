"""Plain-text rendering of enclosure designs."""

from __future__ import annotations

from .results import EnclosureResult


def format_result(result: EnclosureResult) -> list[str]:
    """Return the human-readable lines describing ``result``."""

    lines = [
        f"Type: {result.topology}",
        f"Vb: {result.net_volume_l:.2f} L",
        f"Fc/Fb: {result.tuning_hz:.2f} Hz",
        f"Response: {result.response}",
    ]
    if result.port_length_cm > 0.0:
        lines.append(f"Port Length: {result.port_length_cm:.2f} cm")
        if result.port_diameter_cm > 0.0:
            lines.append(f"Port Diameter: {result.port_diameter_cm:.2f} cm")
            lines.append(f"Air Velocity: {result.air_velocity_ms:.2f} m/s")
    if result.chamber_volumes_l:
        chambers = " / ".join(f"{volume:.2f}" for volume in result.chamber_volumes_l)
        lines.append(f"Chambers (front / rear): {chambers} L")
    lines.append(
        f"Dimensions (WxHxD cm): {result.width_cm:.1f}x{result.height_cm:.1f}x{result.depth_cm:.1f}"
    )
    lines.append(f"Within Xmax: {'Yes' if result.within_xmax else 'No'}")
    lines.extend(f"Warning: {warning.message}" for warning in result.warnings)
    return lines


def render_result(result: EnclosureResult, title: str = "Result") -> str:
    """Return ``result`` framed in a simple text box."""

    content = format_result(result)
    width = max([len(line) for line in content] + [len(title) + 4])
    top = f"┌─ {title} " + "─" * max(width - len(title) - 1, 0) + "┐"
    body = [f"│ {line.ljust(width)} │" for line in content]
    bottom = "└" + "─" * (width + 2) + "┘"
    return "\n".join([top, *body, bottom])


__all__ = ["format_result", "render_result"]
