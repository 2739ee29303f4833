"""Composite scene codec (.map).

Four sections in fixed order (cameras, directional lights, static mesh
instances, skeletal mesh instances), each an ``int32`` count followed by
that many records.  The order is part of the format.
"""

from __future__ import annotations

from typing import Sequence

from sceneport.codecs.binary import BinaryReader, BinaryWriter
from sceneport.models.scene import (
    CameraRecord,
    LightRecord,
    MeshInstanceRecord,
    SceneGraph,
)


def _write_instances(writer: BinaryWriter, records: Sequence[MeshInstanceRecord]) -> None:
    writer.int32(len(records))
    for record in records:
        writer.floats(record.rotation)
        writer.floats(record.location)
        writer.string(record.resource_name)


def encode_map(graph: SceneGraph) -> bytes:
    writer = BinaryWriter()

    writer.int32(len(graph.cameras))
    for camera in graph.cameras:
        writer.floats(camera.location)
        writer.floats(camera.look_at)
        writer.float32(camera.fov)
        writer.float32(camera.aspect_ratio)

    writer.int32(len(graph.lights))
    for light in graph.lights:
        writer.floats(light.color)
        writer.floats(light.direction)
        writer.float32(light.intensity)

    _write_instances(writer, graph.static_meshes)
    _write_instances(writer, graph.skeletal_meshes)

    return writer.getvalue()


def _read_instances(reader: BinaryReader) -> list[MeshInstanceRecord]:
    return [
        MeshInstanceRecord(
            rotation=reader.floats(4),
            location=reader.floats(3),
            resource_name=reader.string(),
        )
        for _ in range(reader.count())
    ]


def decode_map(data: bytes) -> SceneGraph:
    reader = BinaryReader(data)

    cameras = [
        CameraRecord(
            location=reader.floats(3),
            look_at=reader.floats(3),
            fov=reader.float32(),
            aspect_ratio=reader.float32(),
        )
        for _ in range(reader.count())
    ]
    lights = [
        LightRecord(
            color=reader.floats(3),
            direction=reader.floats(3),
            intensity=reader.float32(),
        )
        for _ in range(reader.count())
    ]
    static_meshes = _read_instances(reader)
    skeletal_meshes = _read_instances(reader)

    return SceneGraph(
        cameras=cameras,
        lights=lights,
        static_meshes=static_meshes,
        skeletal_meshes=skeletal_meshes,
    )
