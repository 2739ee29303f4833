"""Error taxonomy shared by every codec and export operation."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Why an export call failed."""

    INVALID_DESTINATION_PATH = "invalid_destination_path"
    NULL_SOURCE_ASSET = "null_source_asset"
    NO_CPU_ACCESS = "no_cpu_access"
    IO_OPEN_FAILURE = "io_open_failure"
    SERIALIZATION_FAILURE = "serialization_failure"
    UNRECOGNIZED_FORMAT_SUFFIX = "unrecognized_format_suffix"
    MISSING_EXPECTED_COMPONENT = "missing_expected_component"


class ExportError(Exception):
    """Raised by codecs and scene resolution; carries an :class:`ErrorKind`."""

    def __init__(self, kind: ErrorKind, message: str = "") -> None:
        super().__init__(message or kind.value)
        self.kind = kind
        self.message = message or kind.value
