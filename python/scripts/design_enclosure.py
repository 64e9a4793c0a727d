#!/usr/bin/env python3
"""Design an enclosure for a driver from the command line."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve()
PYTHON_ROOT = SCRIPT_PATH.parent.parent
PROJECT_ROOT = PYTHON_ROOT.parent

for candidate in (PROJECT_ROOT, PYTHON_ROOT):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

from speakerbox_core import (  # noqa: E402 - added after sys.path tweaks for local execution
    ConfigError,
    DriverParameters,
    EnclosureDesigner,
    configure_logging,
    load_driver_parameters,
    load_settings,
    render_result,
    save_driver_parameters,
)
from speakerbox_core.config import DRIVER_CONFIG_KEYS  # noqa: E402

logger = logging.getLogger("speakerbox_core.cli")

TOPOLOGY_CHOICES = {
    "auto": None,
    "sealed": "Sealed",
    "ported": "Ported",
    "bandpass": "Bandpass",
    "transmission-line": "TransmissionLine",
    "passive-radiator": "PassiveRadiator",
}


def _parse_option(raw: str) -> tuple[str, float]:
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    try:
        return key.strip(), float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"option {key.strip()!r} needs a numeric value") from exc


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--driver",
        type=Path,
        default=None,
        help="key=value file holding the driver's Thiele/Small parameters.",
    )
    for field_name, key in DRIVER_CONFIG_KEYS.items():
        parser.add_argument(
            f"--{key}",
            dest=field_name,
            type=float,
            default=None,
            help=f"Override {field_name}.",
        )
    parser.add_argument(
        "--topology",
        choices=sorted(TOPOLOGY_CHOICES),
        default="auto",
        help="Enclosure topology (default: recommended from Qts).",
    )
    parser.add_argument(
        "--option",
        dest="options",
        action="append",
        type=_parse_option,
        default=[],
        metavar="KEY=VALUE",
        help="Tuning option such as qtc=0.707, fb=28, s=0.6, tr=1.0 or delta=1.0 (repeatable).",
    )
    parser.add_argument("--json", action="store_true", help="Emit the design as JSON.")
    parser.add_argument(
        "--save-driver",
        type=Path,
        default=None,
        help="Write the resolved driver parameters to this key=value file.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write log output to this file.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: SPEAKERBOX_LOG_LEVEL or INFO).")
    return parser


def resolve_driver(args: argparse.Namespace) -> DriverParameters:
    driver = load_driver_parameters(args.driver) if args.driver is not None else DriverParameters()
    overrides = {
        field_name: getattr(args, field_name)
        for field_name in DRIVER_CONFIG_KEYS
        if getattr(args, field_name) is not None
    }
    if overrides:
        driver = replace(driver, **overrides)
    return driver.with_derived_displacement()


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    configure_logging(args.log_level or settings.log_level, args.log_file)
    logger.info("Started")

    try:
        driver = resolve_driver(args)
    except (ConfigError, FileNotFoundError) as exc:
        parser.error(str(exc))

    if args.save_driver is not None:
        path = save_driver_parameters(driver, args.save_driver)
        logger.info("Driver parameters saved to %s", path)

    designer = EnclosureDesigner()
    recommendation = designer.recommend(driver.qts)
    topology = TOPOLOGY_CHOICES[args.topology]
    if topology is None:
        if recommendation == "Other":
            print(
                f"No automatic recommendation for Qts={driver.qts:g}; choose --topology explicitly.",
                file=sys.stderr,
            )
            return 2
        topology = recommendation

    result = designer.design(driver, topology, dict(args.options))
    logger.info("Calculation: %s Vb=%.3f", result.topology, result.net_volume_l)

    if args.json:
        payload = result.to_dict()
        payload["recommendation"] = recommendation
        print(json.dumps(payload, indent=2))
    else:
        print(f"Recommended: {recommendation}")
        print(render_result(result))

    logger.info("Exited")
    return 0 if result.is_feasible else 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
