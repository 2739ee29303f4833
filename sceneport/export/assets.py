"""Per-asset export operations.

Each operation takes a host asset and a destination path and returns an
:class:`ExportResult`.  The destination suffix selects the encoding::

    export_static_mesh    .stm  .json
    export_skeletal_mesh  .skm  .json
    export_skeleton       .skt
    export_anim_sequence  .anm
    export_camera         .json
"""

from __future__ import annotations

import logging
from pathlib import Path

from sceneport.codecs.animation import encode_animation
from sceneport.codecs.geometry import encode_mesh_asset
from sceneport.codecs.json_format import dumps, encode_camera_json, encode_mesh_json
from sceneport.codecs.skeleton import encode_skeleton_asset
from sceneport.config import ExportSettings
from sceneport.export.base import ExportResult, OutputFormat, export_asset
from sceneport.host.base import PathValidator
from sceneport.models.assets import AnimSequence, SkeletalMesh, Skeleton, StaticMesh
from sceneport.models.scene import Camera


def export_static_mesh(
    mesh: StaticMesh | None,
    path: str | Path,
    *,
    settings: ExportSettings | None = None,
    path_validator: PathValidator | None = None,
    log: logging.Logger | None = None,
) -> ExportResult:
    settings = settings or ExportSettings()
    return export_asset(
        "export_static_mesh",
        mesh,
        path,
        {
            OutputFormat.STATIC_MESH: lambda: encode_mesh_asset(
                mesh, settings.normal_convention
            ),
            OutputFormat.JSON: lambda: dumps(encode_mesh_json(mesh)),
        },
        path_validator=path_validator,
        log=log,
    )


def export_skeletal_mesh(
    mesh: SkeletalMesh | None,
    path: str | Path,
    *,
    settings: ExportSettings | None = None,
    path_validator: PathValidator | None = None,
    log: logging.Logger | None = None,
) -> ExportResult:
    settings = settings or ExportSettings()
    return export_asset(
        "export_skeletal_mesh",
        mesh,
        path,
        {
            OutputFormat.SKELETAL_MESH: lambda: encode_mesh_asset(
                mesh, settings.normal_convention
            ),
            OutputFormat.JSON: lambda: dumps(encode_mesh_json(mesh)),
        },
        path_validator=path_validator,
        log=log,
    )


def export_skeleton(
    skeleton: Skeleton | None,
    path: str | Path,
    *,
    path_validator: PathValidator | None = None,
    log: logging.Logger | None = None,
) -> ExportResult:
    return export_asset(
        "export_skeleton",
        skeleton,
        path,
        {OutputFormat.SKELETON: lambda: encode_skeleton_asset(skeleton)},
        path_validator=path_validator,
        log=log,
    )


def export_anim_sequence(
    clip: AnimSequence | None,
    path: str | Path,
    *,
    path_validator: PathValidator | None = None,
    log: logging.Logger | None = None,
) -> ExportResult:
    return export_asset(
        "export_anim_sequence",
        clip,
        path,
        {OutputFormat.ANIMATION: lambda: encode_animation(clip.tracks)},
        path_validator=path_validator,
        log=log,
    )


def export_camera(
    camera: Camera | None,
    path: str | Path,
    *,
    path_validator: PathValidator | None = None,
    log: logging.Logger | None = None,
) -> ExportResult:
    return export_asset(
        "export_camera",
        camera,
        path,
        {OutputFormat.JSON: lambda: dumps(encode_camera_json(camera))},
        path_validator=path_validator,
        log=log,
    )
