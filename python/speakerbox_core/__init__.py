"""Public interface for the SpeakerBox enclosure designer."""

from .alignments import (
    PASSIVE_RADIATOR_ALIGNMENT,
    TRANSMISSION_LINE_TABLE,
    PassiveRadiatorAlignment,
    TaperAlignment,
    lookup_taper,
)
from .config import (
    KeyValueConfig,
    Settings,
    driver_from_config,
    driver_to_config,
    ensure_data_dir,
    load_driver_parameters,
    load_settings,
    save_driver_parameters,
)
from .designer import EnclosureDesigner, design, recommend
from .drivers import DriverParameters
from .errors import ConfigError, SpeakerboxError, UnsupportedTopologyError
from .logs import configure_logging
from .report import format_result, render_result
from .results import DesignWarning, EnclosureResult, WarningKind
from .serialization import (
    dataclass_schema,
    design_request_schema,
    design_response_schema,
    designer_json_schemas,
    recommend_request_schema,
    recommend_response_schema,
)
from .topologies import (
    Bandpass,
    EnclosureTopology,
    PassiveRadiator,
    Ported,
    Sealed,
    TopologyConfig,
    TransmissionLine,
    parse_topology,
    resolve_topology,
)

__all__ = [
    "DriverParameters",
    "EnclosureTopology",
    "Sealed",
    "Ported",
    "Bandpass",
    "TransmissionLine",
    "PassiveRadiator",
    "TopologyConfig",
    "parse_topology",
    "resolve_topology",
    "EnclosureDesigner",
    "EnclosureResult",
    "DesignWarning",
    "WarningKind",
    "design",
    "recommend",
    "TaperAlignment",
    "PassiveRadiatorAlignment",
    "TRANSMISSION_LINE_TABLE",
    "PASSIVE_RADIATOR_ALIGNMENT",
    "lookup_taper",
    "SpeakerboxError",
    "UnsupportedTopologyError",
    "ConfigError",
    "KeyValueConfig",
    "Settings",
    "driver_from_config",
    "driver_to_config",
    "load_driver_parameters",
    "save_driver_parameters",
    "load_settings",
    "ensure_data_dir",
    "configure_logging",
    "format_result",
    "render_result",
    "dataclass_schema",
    "design_request_schema",
    "design_response_schema",
    "recommend_request_schema",
    "recommend_response_schema",
    "designer_json_schemas",
]
