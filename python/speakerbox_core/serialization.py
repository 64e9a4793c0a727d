"""JSON schema helpers describing the designer request/response contracts.

These helpers provide lightweight JSON Schema v2020-12 documents so other
consumers (FastAPI gateway, CLI, external tooling) share one contract without
duplicating structure.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import MISSING, fields, is_dataclass
from enum import Enum
from types import UnionType
from typing import Any, Union, get_args, get_origin, get_type_hints

from .drivers import DriverParameters
from .results import DesignWarning, EnclosureResult
from .topologies import TOPOLOGY_CONFIGS, EnclosureTopology

SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"


def dataclass_schema(
    cls: type[Any],
    *,
    field_overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> dict[str, Any]:
    """Return a JSON schema describing the given dataclass."""

    if not is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass")

    hints = get_type_hints(cls)
    record_fields = fields(cls)
    properties = {item.name: _schema_for_type(hints[item.name]) for item in record_fields}
    required = [
        item.name
        for item in record_fields
        if item.default is MISSING and item.default_factory is MISSING
    ]

    overrides = field_overrides or _DATACLASS_OVERRIDES.get(cls, {})
    for name, override in overrides.items():
        if properties.get(name):
            _apply_override(properties[name], override)

    return {
        "title": cls.__name__,
        "type": "object",
        "additionalProperties": False,
        "properties": properties,
        "required": required,
    }


def design_request_schema() -> dict[str, Any]:
    """Return the JSON schema describing a design request payload."""

    option_keys = sorted(config.option_key for config in TOPOLOGY_CONFIGS.values())
    return {
        "$schema": SCHEMA_DRAFT,
        "title": "EnclosureDesignRequest",
        "type": "object",
        "additionalProperties": False,
        "required": ["driver", "topology"],
        "properties": {
            "driver": dataclass_schema(DriverParameters),
            "topology": _topology_schema(),
            "options": {
                "title": "Tuning options",
                "type": "object",
                "description": f"Per-topology tuning overrides ({', '.join(option_keys)}); unknown keys are ignored.",
                "additionalProperties": {"type": "number"},
            },
        },
    }


def design_response_schema() -> dict[str, Any]:
    """Return the JSON schema for a design response payload."""

    schema = dataclass_schema(EnclosureResult)
    schema["$schema"] = SCHEMA_DRAFT
    schema["title"] = "EnclosureDesignResponse"
    # Serialised via ``EnclosureResult.to_dict`` which emits warnings as plain objects
    # and their ``(name, value)`` detail pairs as a mapping.
    warning_schema = dataclass_schema(DesignWarning)
    warning_schema["properties"]["details"] = {"type": "object", "additionalProperties": {"type": "number"}}
    schema["properties"]["warnings"] = {"type": "array", "items": warning_schema}
    schema["properties"]["topology"] = _topology_schema()
    return schema


def recommend_request_schema() -> dict[str, Any]:
    return {
        "$schema": SCHEMA_DRAFT,
        "title": "TopologyRecommendationRequest",
        "type": "object",
        "additionalProperties": False,
        "required": ["qts"],
        "properties": {
            "qts": {"type": "number", "description": "Driver total Q."},
        },
    }


def recommend_response_schema() -> dict[str, Any]:
    return {
        "$schema": SCHEMA_DRAFT,
        "title": "TopologyRecommendationResponse",
        "type": "object",
        "additionalProperties": False,
        "required": ["qts", "recommendation"],
        "properties": {
            "qts": {"type": "number"},
            "recommendation": {"type": "string", "enum": ["Sealed", "Ported", "Other"]},
        },
    }


def designer_json_schemas() -> dict[str, dict[str, dict[str, Any]]]:
    """Return a catalog of schemas keyed by operation."""

    return {
        "design": {
            "request": design_request_schema(),
            "response": design_response_schema(),
        },
        "recommend": {
            "request": recommend_request_schema(),
            "response": recommend_response_schema(),
        },
    }


def _topology_schema() -> dict[str, Any]:
    return {
        "type": "string",
        "enum": [member.value for member in EnclosureTopology],
        "description": "Enclosure topology name.",
    }


_PRIMITIVE_TYPES: dict[Any, str] = {
    float: "number",
    int: "integer",
    str: "string",
    bool: "boolean",
    type(None): "null",
}


def _schema_for_type(tp: Any) -> dict[str, Any]:
    """Map the annotation kinds used by the designer records onto JSON Schema."""

    if tp in _PRIMITIVE_TYPES:
        return {"type": _PRIMITIVE_TYPES[tp]}
    if isinstance(tp, type):
        if issubclass(tp, Enum):
            return {"type": "string", "enum": [member.value for member in tp]}
        if is_dataclass(tp):
            return dataclass_schema(tp)
        return {}

    origin, args = get_origin(tp), get_args(tp)
    if origin in (tuple, list):
        # Only homogeneous ``tuple[T, ...]`` / ``list[T]`` appear in the records.
        return {"type": "array", "items": _schema_for_type(args[0]) if args else {}}
    if origin is dict:
        return {
            "type": "object",
            "additionalProperties": _schema_for_type(args[1]) if len(args) > 1 else {},
        }
    if origin in (Union, UnionType):
        members = [schema for schema in map(_schema_for_type, args) if schema]
        return {"anyOf": members} if len(members) > 1 else (members[0] if members else {})
    return {}


def _apply_override(schema: dict[str, Any], override: Mapping[str, Any]) -> None:
    # Optional fields carry the constraint on their non-null branch only.
    targets = [option for option in schema.get("anyOf", ()) if option.get("type") != "null"]
    for target in targets or [schema]:
        target.update(override)


_DRIVER_FIELD_OVERRIDES: dict[str, dict[str, Any]] = {
    "fs_hz": {"description": "Free-air resonance frequency (Hz)."},
    "qts": {"description": "Total Q at resonance."},
    "vas_l": {"description": "Equivalent compliance volume (litres)."},
    "re_ohm": {"description": "Voice-coil DC resistance (ohms)."},
    "sd_cm2": {"description": "Effective diaphragm area (cm^2)."},
    "xmax_mm": {"description": "One-way linear excursion (mm)."},
    "vd_l": {"description": "Displaced volume at Xmax (litres)."},
    "le_mh": {"description": "Voice-coil inductance (mH)."},
    "cms_m_per_n": {"description": "Mechanical compliance (m/N)."},
    "mms_g": {"description": "Moving mass (g)."},
    "bl_t_m": {"description": "Force factor (T*m)."},
}

_RESULT_FIELD_OVERRIDES: dict[str, dict[str, Any]] = {
    "net_volume_l": {"description": "Usable volume after internal displacements (litres)."},
    "tuning_hz": {"description": "Corner (Fc) or tuning (Fb) frequency (Hz)."},
    "port_length_cm": {"minimum": 0.0},
    "port_diameter_cm": {"minimum": 0.0},
    "air_velocity_ms": {"minimum": 0.0},
    "width_cm": {"minimum": 0.0},
    "height_cm": {"minimum": 0.0},
    "depth_cm": {"minimum": 0.0},
}

_DATACLASS_OVERRIDES: dict[type[Any], dict[str, dict[str, Any]]] = {
    DriverParameters: _DRIVER_FIELD_OVERRIDES,
    EnclosureResult: _RESULT_FIELD_OVERRIDES,
}


__all__ = [
    "dataclass_schema",
    "design_request_schema",
    "design_response_schema",
    "recommend_request_schema",
    "recommend_response_schema",
    "designer_json_schemas",
]
