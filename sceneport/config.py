"""Global configuration: constants, output layout, and layered export settings."""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

# Written into every JSON document; readers currently ignore it.
FILE_VERSION = 1

# Distance along the camera forward axis used for the persisted look-at point.
CAMERA_LOOK_AT_DISTANCE = 100.0

# Only the highest-detail LOD is ever written by the binary mesh path.
EXPORTED_LOD_INDEX = 0

# Destination suffixes
JSON_SUFFIX = ".json"
STATIC_MESH_SUFFIX = ".stm"
SKELETAL_MESH_SUFFIX = ".skm"
SKELETON_SUFFIX = ".skt"
ANIMATION_SUFFIX = ".anm"
MAP_SUFFIX = ".map"

# Side-output sub-folders, relative to the directory holding the .map file
MESH_DIR = "Meshes"
SKELETON_DIR = "Skeletons"
ANIMATION_DIR = "Animations"
TEXTURE_DIR = "Textures"

CONFIG_DIR = ".sceneport"
CONFIG_FILE = "config.json"


class NormalConvention(str, Enum):
    """How a vertex normal is decoded from its packed tangent basis."""

    RAW_XYZ = "raw_xyz"
    HANDEDNESS_SCALED = "handedness_scaled"


class ExportSettings(BaseModel):
    """Runtime switches for an export session."""

    log_level: str = "INFO"
    normal_convention: NormalConvention = NormalConvention.RAW_XYZ
    deduplicate_assets: bool = False
    look_at_distance: float = CAMERA_LOOK_AT_DISTANCE


# Environment variables mapped onto ExportSettings fields
_ENV_KEYS: dict[str, str] = {
    "SCENEPORT_LOG_LEVEL": "log_level",
    "SCENEPORT_NORMAL_CONVENTION": "normal_convention",
    "SCENEPORT_DEDUPLICATE_ASSETS": "deduplicate_assets",
    "SCENEPORT_LOOK_AT_DISTANCE": "look_at_distance",
}


def _apply(values: dict[str, Any], field_name: str, raw: Any, source: str) -> None:
    """Merge one override into *values* if it validates; otherwise warn and skip."""
    try:
        checked = ExportSettings.model_validate({**values, field_name: raw})
    except ValidationError:
        logger.warning("Ignoring invalid %s=%r from %s", field_name, raw, source)
        return
    values[field_name] = getattr(checked, field_name)


def load_settings(project_path: str | Path = ".") -> ExportSettings:
    """Load merged settings: defaults -> .sceneport/config.json -> env vars.

    An unreadable or malformed config file is logged and ignored.  A single
    value that fails validation is skipped with a warning, keeping the value
    from the layer below.  The resulting ``log_level`` is applied to the
    ``sceneport`` logger.
    """
    values: dict[str, Any] = ExportSettings().model_dump()

    config_json = Path(project_path) / CONFIG_DIR / CONFIG_FILE
    if config_json.is_file():
        try:
            data = json.loads(config_json.read_text(encoding="utf-8"))
            for key, value in data.items():
                if key in values:
                    _apply(values, key, value, str(config_json))
        except (json.JSONDecodeError, OSError, AttributeError):
            logger.debug("Could not read %s", config_json, exc_info=True)

    for env_key, field_name in _ENV_KEYS.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            _apply(values, field_name, env_val, env_key)

    settings = ExportSettings.model_validate(values)
    configure_logging(settings.log_level)
    return settings


def configure_logging(level: str | int | None = None) -> None:
    """Apply a log level to the ``sceneport`` logger hierarchy."""
    if level is None:
        level = os.environ.get("SCENEPORT_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.getLogger("sceneport").setLevel(level)
