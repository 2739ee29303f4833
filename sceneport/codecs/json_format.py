"""JSON documents for meshes and cameras.

Both paths require CPU access and at least one LOD.  Unlike the binary
path, every LOD is written and indices keep their full width.  Vertex coordinates are rounded to float32 first, so a JSON reader
recovers exactly the value the binary codec would have stored.
"""

from __future__ import annotations

import json
import struct
from typing import Any

from sceneport.codecs.geometry import check_mesh_exportable
from sceneport.config import FILE_VERSION
from sceneport.models.assets import StaticMesh
from sceneport.models.scene import Camera


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _xyz(values: tuple[float, float, float]) -> dict[str, float]:
    return {"x": _f32(values[0]), "y": _f32(values[1]), "z": _f32(values[2])}


def encode_mesh_json(mesh: StaticMesh) -> dict[str, Any]:
    """Build the mesh document.

    ``VertexFormat`` is an empty placeholder kept for readers that expect
    the key.
    """
    check_mesh_exportable(mesh)
    lods: list[dict[str, Any]] = []
    for lod_index, lod in enumerate(mesh.lods):
        lods.append({
            "LOD": lod_index,
            "Vertices": [_xyz(v.position) for v in lod.vertices],
            "Indices": [{"index": int(i)} for i in lod.indices],
        })

    return {
        "FileVersion": FILE_VERSION,
        "MeshName": mesh.name,
        "VertexFormat": [],
        "LODs": lods,
    }


def encode_camera_json(camera: Camera) -> dict[str, Any]:
    """Camera document.  Rotation is stored as a rotator, not a look-at point."""
    pitch, yaw, roll = camera.rotator()
    return {
        "FileVersion": FILE_VERSION,
        "Camera": {
            "Location": _xyz(camera.location),
            "Rotation": {"roll": roll, "yaw": yaw, "pitch": pitch},
            "FOV": camera.fov,
            "AspectRatio": camera.aspect_ratio,
        },
    }


def dumps(document: dict[str, Any], indent: int | None = None) -> str:
    return json.dumps(document, indent=indent)
