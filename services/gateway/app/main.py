"""FastAPI gateway exposing the enclosure designer and saved designs."""

from __future__ import annotations

import logging
import math
from typing import Any, cast

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from speakerbox_core import (
    DriverParameters,
    EnclosureDesigner,
    UnsupportedTopologyError,
    configure_logging,
    designer_json_schemas,
    load_settings,
    parse_topology,
)

from .store import VALID_TOPOLOGIES, DesignStore

logger = logging.getLogger(__name__)

_designer = EnclosureDesigner()
_store: DesignStore | None = None


def _get_store() -> DesignStore:
    global _store
    if _store is None:
        _store = DesignStore(load_settings().db_path)
    return _store


def designer_schema_catalog() -> dict[str, dict[str, dict[str, Any]]]:
    """Return the JSON schema catalog for the designer operations."""

    return designer_json_schemas()


def _model_dump(model: BaseModel) -> dict[str, Any]:
    return cast(dict[str, Any], model.model_dump())


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats, which JSON cannot carry, with ``None``."""

    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    return value


def _design_payload(
    driver: DriverParameters,
    topology: str,
    options: dict[str, float] | None = None,
) -> dict[str, Any]:
    """Run the designer and return the JSON response body.

    Raises :class:`UnsupportedTopologyError` for unknown topology names.
    """

    result = _designer.design(driver, topology, options or {})
    payload = _json_safe(result.to_dict())
    payload["recommendation"] = _designer.recommend(driver.qts)
    payload["feasible"] = result.is_feasible
    return payload


def _recommend_payload(qts: float) -> dict[str, Any]:
    return {"qts": qts, "recommendation": _designer.recommend(qts)}


class DriverPayload(BaseModel):
    fs_hz: float = Field(0.0)
    qts: float = Field(0.0)
    vas_l: float = Field(0.0)
    re_ohm: float = Field(0.0)
    sd_cm2: float = Field(0.0)
    xmax_mm: float = Field(0.0)
    vd_l: float = Field(0.0)
    le_mh: float = Field(0.0)
    cms_m_per_n: float = Field(0.0)
    mms_g: float = Field(0.0)
    bl_t_m: float = Field(0.0)

    def to_driver(self) -> DriverParameters:
        data = _model_dump(self)
        return DriverParameters(**data).with_derived_displacement()


class DesignRequest(BaseModel):
    driver: DriverPayload = Field(default_factory=DriverPayload)
    topology: str
    options: dict[str, float] = Field(default_factory=dict)


settings = load_settings()
configure_logging(settings.log_level)

app = FastAPI(title="SpeakerBox Gateway", version="0.1.0")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/recommend")
async def recommend_topology(qts: float = Query(...)) -> dict[str, Any]:
    return _recommend_payload(qts)


@app.post("/design")
async def create_design(payload: DesignRequest) -> dict[str, Any]:
    driver = payload.driver.to_driver()
    try:
        body = _design_payload(driver, payload.topology, payload.options)
    except UnsupportedTopologyError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    record = _get_store().save_design(body["topology"], driver.to_dict(), payload.options, body)
    logger.info("Stored %s design %s", record.topology, record.id)
    return {"id": record.id, **body}


@app.get("/designs")
async def list_designs(limit: int = 20, topology: str | None = None) -> dict[str, Any]:
    topology_filter = None
    if topology is not None:
        try:
            topology_filter = parse_topology(topology).value
        except UnsupportedTopologyError as exc:
            raise HTTPException(status_code=400, detail="Invalid topology filter") from exc
    designs = [record.to_dict() for record in _get_store().list_designs(limit=limit, topology=topology_filter)]
    return {"designs": designs}


@app.get("/designs/stats")
async def design_stats() -> dict[str, Any]:
    counts = _get_store().topology_counts()
    return {"counts": counts, "total": sum(counts.values()), "topologies": sorted(VALID_TOPOLOGIES)}


@app.get("/designs/{design_id}")
async def fetch_design(design_id: str) -> dict[str, Any]:
    record = _get_store().get_design(design_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Design not found")
    return record.to_dict()


@app.get("/schemas/designer")
async def list_designer_schemas() -> dict[str, Any]:
    """Return the JSON schema catalog for the designer operations."""

    return {"operations": designer_schema_catalog()}


@app.get("/schemas/designer/{operation}")
async def fetch_designer_schema(operation: str) -> dict[str, Any]:
    catalog = designer_schema_catalog()
    key = operation.lower()
    entry = catalog.get(key)
    if entry is None:
        raise HTTPException(status_code=404, detail="Designer operation not found")
    return {"operation": key, "request": entry["request"], "response": entry["response"]}


__all__ = [
    "app",
    "designer_schema_catalog",
]
