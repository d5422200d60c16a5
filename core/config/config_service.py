"""Typed, layered configuration loader with precedence handling.

Layers (later wins):
    0. embedded defaults (``_DEFAULTS``)
    1. ``core/config/defaults.ini``
    2. environment variables ``FORMBAKE_<SECTION>__<KEY>``
    3. machine INI, path taken from ``FORMBAKE_CONFIG`` (optional)
"""
from __future__ import annotations

import os
import configparser
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, Optional, Tuple, get_type_hints

# --------------------------------------------------------------------------- #
#  Paths & default definitions
# --------------------------------------------------------------------------- #

def _find_project_root() -> Path:
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "core").is_dir():
            return parent
    return here.parent

PROJECT_ROOT = _find_project_root()
CONFIG_DIR = PROJECT_ROOT / "core" / "config"
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
ENV_PREFIX = "FORMBAKE_"
MACHINE_INI_ENV = "FORMBAKE_CONFIG"


_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "Storage": {
        "data_dir": (PROJECT_ROOT / "data").as_posix(),
        "database": (PROJECT_ROOT / "data" / "formbake.db").as_posix(),
        "log_database": (PROJECT_ROOT / "data" / "logs.db").as_posix(),
    },
    "Server": {
        "result_url_prefix": "/uploads/signed-pdfs",
        "host": "0.0.0.0",
        "port": "3001",
    },
    "Viewport": {
        "max_width": "800",
        "allow_upscale": "false",
    },
    "Logging": {
        "level": "INFO",
    },
}


# --------------------------------------------------------------------------- #
#  Datamodels
# --------------------------------------------------------------------------- #

@dataclass
class StorageConfig:
    data_dir: Path
    database: Path
    log_database: Path


@dataclass
class ServerConfig:
    result_url_prefix: str = "/uploads/signed-pdfs"
    host: str = "0.0.0.0"
    port: int = 3001


@dataclass
class ViewportConfig:
    max_width: float = 800.0
    allow_upscale: bool = False


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class AppConfig:
    storage: StorageConfig
    server: ServerConfig
    viewport: ViewportConfig
    logging: LoggingConfig


# --------------------------------------------------------------------------- #
#  Helpers
# --------------------------------------------------------------------------- #

def _cp_to_dict(cp: configparser.ConfigParser) -> Dict[str, Dict[str, Any]]:
    data: Dict[str, Dict[str, Any]] = {}
    for section in cp.sections():
        data[section] = {k: v for k, v in cp.items(section)}
    return data


def _read_ini(path: Path) -> Dict[str, Dict[str, Any]]:
    cp = configparser.ConfigParser()
    cp.read(path, encoding="utf-8")
    return _cp_to_dict(cp)


def _apply(target: Dict[str, Dict[str, Any]], source: Dict[str, Dict[str, Any]],
           layer: str, origin: str,
           sources: Dict[Tuple[str, str], Dict[str, str]]) -> None:
    for section, items in source.items():
        sec = target.setdefault(section, {})
        for key, value in items.items():
            sec[key] = value
            sources[(section, key)] = {"layer": layer, "source": origin}


def _cast(value: Any, typ: type) -> Any:
    if typ is Path:
        return Path(str(value)).expanduser()
    if typ is bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    if typ is int:
        return int(value)
    if typ is float:
        return float(value)
    return typ(value)


def _build_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    hints = get_type_hints(cls)
    kwargs = {}
    for field in fields(cls):
        val = data.get(field.name, field.default)
        kwargs[field.name] = _cast(val, hints[field.name])
    return cls(**kwargs)


def _env_overlays() -> Dict[str, Dict[str, Any]]:
    result: Dict[str, Dict[str, Any]] = {}
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        remainder = env_key[len(ENV_PREFIX):]
        parts = remainder.split("__", 1)
        if len(parts) != 2:
            continue
        section, key = parts
        section = section.title()
        key = key.lower()
        result.setdefault(section, {})[key] = value
    return result


def _machine_config_path() -> Optional[Path]:
    raw = os.environ.get(MACHINE_INI_ENV)
    return Path(raw).expanduser() if raw else None


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #


class ConfigService:
    """Facade merging layered configuration with type safety."""

    def __init__(self, *, defaults_ini: Path | None = DEFAULTS_INI,
                 machine_ini: Path | None = None) -> None:
        self._lock = RLock()
        self._defaults_ini = defaults_ini
        self._machine_ini = machine_ini
        self.reload()

    # ------------------------------------------------------------------ #
    def reload(self) -> None:
        with self._lock:
            merged: Dict[str, Dict[str, Any]] = {}
            sources: Dict[Tuple[str, str], Dict[str, str]] = {}

            # Layer 0: embedded defaults
            _apply(merged, _DEFAULTS, "code", "embedded", sources)

            # Layer 1: defaults.ini
            if self._defaults_ini is not None and self._defaults_ini.exists():
                _apply(merged, _read_ini(self._defaults_ini), "defaults.ini",
                       str(self._defaults_ini), sources)

            # Layer 2: environment variables
            _apply(merged, _env_overlays(), "env", "os.environ", sources)

            # Layer 3: machine config
            machine = self._machine_ini or _machine_config_path()
            if machine is not None and machine.exists():
                _apply(merged, _read_ini(machine), "machine", str(machine), sources)

            self._merged = merged
            self._sources = sources

            self.storage = _build_dataclass(StorageConfig, merged.get("Storage", {}))
            self.server = _build_dataclass(ServerConfig, merged.get("Server", {}))
            self.viewport = _build_dataclass(ViewportConfig, merged.get("Viewport", {}))
            self.logging = _build_dataclass(LoggingConfig, merged.get("Logging", {}))

    @property
    def app_config(self) -> AppConfig:
        return AppConfig(
            storage=self.storage,
            server=self.server,
            viewport=self.viewport,
            logging=self.logging,
        )

    # ------------------------------------------------------------------ #
    def get(self, section: str, key: str, *, cast: Callable[[Any], Any] | type = str) -> Any:
        val = self._merged.get(section, {}).get(key)
        if val is None:
            return None
        if isinstance(cast, type):
            return _cast(val, cast)
        return cast(val)

    def meta_source(self, section: str, key: str) -> Dict[str, str] | None:
        return self._sources.get((section, key))


_config_service: ConfigService | None = None
_SINGLETON_LOCK = RLock()


def get_config_service() -> ConfigService:
    """Process-wide ConfigService, created on first use."""
    global _config_service
    with _SINGLETON_LOCK:
        if _config_service is None:
            _config_service = ConfigService()
        return _config_service
