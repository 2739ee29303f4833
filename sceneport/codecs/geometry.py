"""Binary mesh codec (.stm / .skm).

Layout, little-endian::

    int32  vertexCount
    vertexCount x { float32[3] position, float32[3] normal, float32[2] uv }
    int32  indexCount
    indexCount  x uint16

Indices are stored as 16 bits and wrap modulo 65536.  That is a known limit
of the format; the JSON path keeps full-width indices.
"""

from __future__ import annotations

import logging

from sceneport.codecs.binary import BinaryReader, BinaryWriter
from sceneport.config import EXPORTED_LOD_INDEX, NormalConvention
from sceneport.errors import ErrorKind, ExportError
from sceneport.models.assets import MeshLOD, Quat, StaticMesh, Vec3, Vertex

logger = logging.getLogger(__name__)

VERTEX_STRIDE = 32  # 12 position + 12 normal + 8 uv
INDEX_STRIDE = 2


def decode_normal(
    tangent_z: Quat,
    convention: NormalConvention = NormalConvention.RAW_XYZ,
) -> Vec3:
    """Derive the stored normal from a packed tangent-basis vector."""
    x, y, z, w = tangent_z
    if convention is NormalConvention.HANDEDNESS_SCALED:
        return (x * w, y * w, z * w)
    return (x, y, z)


def encoded_size(vertex_count: int, index_count: int) -> int:
    return 4 + vertex_count * VERTEX_STRIDE + 4 + index_count * INDEX_STRIDE


def encode_mesh(
    lod: MeshLOD,
    allow_cpu_access: bool = True,
    normal_convention: NormalConvention = NormalConvention.RAW_XYZ,
) -> bytes:
    """Encode one LOD.  Raises :class:`ExportError` on failure."""
    if not allow_cpu_access:
        raise ExportError(
            ErrorKind.NO_CPU_ACCESS, "mesh must allow CPU access to be exported"
        )

    writer = BinaryWriter()
    writer.int32(len(lod.vertices))
    for vertex in lod.vertices:
        writer.floats(vertex.position)
        writer.floats(decode_normal(vertex.tangent_z, normal_convention))
        writer.floats(vertex.uv)

    writer.int32(len(lod.indices))
    wrapped = 0
    for index in lod.indices:
        if index > 0xFFFF:
            wrapped += 1
        writer.uint16(index & 0xFFFF)
    if wrapped:
        logger.debug("%d index values wrapped to 16 bits", wrapped)

    return writer.getvalue()


def check_mesh_exportable(mesh: StaticMesh) -> None:
    """Raise unless *mesh* allows CPU access and has LOD render data."""
    if not mesh.allow_cpu_access:
        raise ExportError(
            ErrorKind.NO_CPU_ACCESS,
            f"mesh {mesh.name!r} must allow CPU access to be exported",
        )
    if len(mesh.lods) <= EXPORTED_LOD_INDEX:
        raise ExportError(
            ErrorKind.SERIALIZATION_FAILURE, f"mesh {mesh.name!r} has no render data"
        )


def encode_mesh_asset(
    mesh: StaticMesh,
    normal_convention: NormalConvention = NormalConvention.RAW_XYZ,
) -> bytes:
    """Encode the first LOD of *mesh*; further LODs are never written."""
    check_mesh_exportable(mesh)
    return encode_mesh(mesh.lods[EXPORTED_LOD_INDEX], True, normal_convention)


def decode_mesh(data: bytes) -> MeshLOD:
    """Read a binary mesh back.  Normals land in ``tangent_z`` with W = 1."""
    reader = BinaryReader(data)
    vertices: list[Vertex] = []
    for _ in range(reader.count()):
        position = reader.floats(3)
        normal = reader.floats(3)
        uv = reader.floats(2)
        vertices.append(
            Vertex(position=position, tangent_z=(*normal, 1.0), uv=uv)
        )
    indices = [reader.uint16() for _ in range(reader.count())]
    return MeshLOD(vertices=vertices, indices=indices)
