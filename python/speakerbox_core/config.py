"""Flat ``key=value`` configuration files and runtime settings.

Driver parameters are persisted field by field using short keys (``fs``,
``qts``, ``vas`` ...). Lines starting with ``;`` or ``#`` are comments.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .drivers import DriverParameters
from .errors import ConfigError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DRIVER_CONFIG_KEYS: dict[str, str] = {
    "fs_hz": "fs",
    "qts": "qts",
    "vas_l": "vas",
    "re_ohm": "re",
    "sd_cm2": "sd",
    "xmax_mm": "xmax",
    "vd_l": "vd",
    "le_mh": "le",
    "cms_m_per_n": "cms",
    "mms_g": "mms",
    "bl_t_m": "bl",
}

_COMMENT_PREFIXES = (";", "#")


class KeyValueConfig:
    """In-memory view of a flat ``key=value`` file."""

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data or {})

    def load(self, path: str | Path) -> bool:
        """Merge entries from ``path``. Returns ``False`` when the file does not exist."""

        file_path = Path(path)
        if not file_path.is_file():
            logger.debug("Config file %s not found", file_path)
            return False
        with file_path.open(encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith(_COMMENT_PREFIXES):
                    continue
                key, sep, value = line.partition("=")
                if not sep:
                    continue
                self._data[key.strip()] = value.strip()
        logger.debug("Loaded %d entries from %s", len(self._data), file_path)
        return True

    def save(self, path: str | Path) -> Path:
        """Write all entries to ``path`` readable and writable by the owner only."""

        file_path = Path(path)
        if file_path.parent != Path("."):
            file_path.parent.mkdir(parents=True, exist_ok=True)
        lines = [f"{key}={value}\n" for key, value in sorted(self._data.items())]
        file_path.write_text("".join(lines), encoding="utf-8")
        os.chmod(file_path, stat.S_IRUSR | stat.S_IWUSR)
        return file_path

    def get(self, key: str, default: str = "") -> str:
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        self._data[key] = str(value)

    def get_float(self, key: str, default: float = 0.0) -> float:
        raw = self._data.get(key)
        if raw is None or raw == "":
            return default
        try:
            return float(raw)
        except ValueError as exc:
            raise ConfigError(f"Value for {key!r} is not a number: {raw!r}") from exc

    def as_dict(self) -> dict[str, str]:
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


def driver_to_config(params: DriverParameters, config: KeyValueConfig | None = None) -> KeyValueConfig:
    """Store every driver field in ``config`` (a new one when omitted)."""

    target = config if config is not None else KeyValueConfig()
    for field_name, key in DRIVER_CONFIG_KEYS.items():
        target.set(key, repr(float(getattr(params, field_name))))
    return target


def driver_from_config(config: KeyValueConfig) -> DriverParameters:
    """Build driver parameters from ``config``; absent keys read as zero."""

    values = {field_name: config.get_float(key) for field_name, key in DRIVER_CONFIG_KEYS.items()}
    return DriverParameters(**values)


def load_driver_parameters(path: str | Path) -> DriverParameters:
    config = KeyValueConfig()
    if not config.load(path):
        raise FileNotFoundError(f"Driver file not found: {path}")
    return driver_from_config(config)


def save_driver_parameters(params: DriverParameters, path: str | Path) -> Path:
    return driver_to_config(params).save(path)


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime settings resolved from the environment."""

    data_dir: Path
    log_level: str
    log_file: Path
    db_path: Path


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Resolve settings from ``SPEAKERBOX_*`` environment variables."""

    env = os.environ if environ is None else environ
    data_dir = Path(env.get("SPEAKERBOX_DATA_DIR", "data")).expanduser()
    log_level = env.get("SPEAKERBOX_LOG_LEVEL", "INFO").upper()
    db_path = env.get("SPEAKERBOX_DB_PATH")
    return Settings(
        data_dir=data_dir,
        log_level=log_level,
        log_file=data_dir / "speakerbox.log",
        db_path=Path(db_path).expanduser() if db_path else data_dir / "designs.db",
    )


def ensure_data_dir(settings: Settings) -> Path:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings.data_dir


__all__ = [
    "DRIVER_CONFIG_KEYS",
    "KeyValueConfig",
    "Settings",
    "driver_from_config",
    "driver_to_config",
    "ensure_data_dir",
    "load_driver_parameters",
    "load_settings",
    "save_driver_parameters",
]
