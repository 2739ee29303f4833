"""Shared export plumbing: results, format selection, and file output."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping

from sceneport.config import (
    ANIMATION_SUFFIX,
    JSON_SUFFIX,
    MAP_SUFFIX,
    SKELETAL_MESH_SUFFIX,
    SKELETON_SUFFIX,
    STATIC_MESH_SUFFIX,
)
from sceneport.errors import ErrorKind, ExportError
from sceneport.host.base import PathValidator

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Destination encodings, keyed by file suffix."""

    JSON = JSON_SUFFIX
    STATIC_MESH = STATIC_MESH_SUFFIX
    SKELETAL_MESH = SKELETAL_MESH_SUFFIX
    SKELETON = SKELETON_SUFFIX
    ANIMATION = ANIMATION_SUFFIX
    MAP = MAP_SUFFIX


def format_for_path(path: Path, accepted: Mapping[OutputFormat, Any]) -> OutputFormat:
    """Pick the format from *path*'s suffix; there is no default."""
    suffix = path.suffix.lower()
    for fmt in accepted:
        if fmt.value == suffix:
            return fmt
    raise ExportError(
        ErrorKind.UNRECOGNIZED_FORMAT_SUFFIX,
        f"unrecognized suffix {path.suffix!r} for {path.name}; expected one of "
        f"{', '.join(f.value for f in accepted)}",
    )


@dataclass
class ExportResult:
    """Result of one export call.  Truthy exactly when the export succeeded."""

    file_path: Path | None
    format: str
    success: bool = True
    message: str = ""
    error: ErrorKind | None = None
    side_files: list[Path] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def failure(cls, exc: ExportError, fmt: str = "") -> ExportResult:
        return cls(
            file_path=None,
            format=fmt,
            success=False,
            message=exc.message,
            error=exc.kind,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_path": str(self.file_path) if self.file_path else None,
            "format": self.format,
            "success": self.success,
            "message": self.message,
            "error": self.error.value if self.error else None,
            "side_files": [str(p) for p in self.side_files],
        }


def write_output(path: Path, payload: bytes | str) -> None:
    """Write a fully encoded payload; the handle is closed on every path."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(payload, bytes):
            with open(path, "wb") as fh:
                fh.write(payload)
        else:
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(payload)
    except OSError as exc:
        raise ExportError(
            ErrorKind.IO_OPEN_FAILURE, f"cannot write {path}: {exc}"
        ) from exc


def export_asset(
    operation: str,
    asset: Any,
    path: str | Path,
    encoders: Mapping[OutputFormat, Callable[[], bytes | str]],
    *,
    path_validator: PathValidator | None = None,
    log: logging.Logger | None = None,
) -> ExportResult:
    """Validate, encode and write one asset.

    Encoding completes in memory before the destination is opened, so a
    failed encode never leaves a file behind.
    """
    log = log or logger
    validator = path_validator or PathValidator()
    path = Path(path)
    fmt = ""
    try:
        if asset is None:
            raise ExportError(ErrorKind.NULL_SOURCE_ASSET, "no source asset given")
        if not validator.validate(path):
            raise ExportError(
                ErrorKind.INVALID_DESTINATION_PATH, f"invalid destination: {path}"
            )
        output_format = format_for_path(path, encoders)
        fmt = output_format.value
        payload = encoders[output_format]()
        write_output(path, payload)
    except ExportError as exc:
        log.warning("%s: failed (%s): %s", operation, exc.kind.value, exc.message)
        return ExportResult.failure(exc, fmt)

    log.info("%s: success (%s)", operation, path)
    return ExportResult(
        file_path=path,
        format=fmt,
        message=f"{operation} wrote {path.name}",
    )
