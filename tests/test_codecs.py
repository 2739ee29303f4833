"""Tests for the binary codecs: geometry, skeleton, animation, and .map."""

from __future__ import annotations

import struct

import pytest
from pydantic import ValidationError

from sceneport.codecs.animation import decode_animation, encode_animation
from sceneport.codecs.binary import BinaryReader, BinaryWriter
from sceneport.codecs.geometry import (
    decode_mesh,
    decode_normal,
    encode_mesh,
    encode_mesh_asset,
    encoded_size,
)
from sceneport.codecs.scene import decode_map, encode_map
from sceneport.codecs.skeleton import decode_skeleton, encode_skeleton
from sceneport.config import NormalConvention
from sceneport.errors import ErrorKind, ExportError
from sceneport.models.assets import (
    AnimationTrack,
    Bone,
    MeshLOD,
    Skeleton,
    StaticMesh,
    Transform,
    Vertex,
)
from sceneport.models.scene import (
    CameraRecord,
    LightRecord,
    MeshInstanceRecord,
    SceneGraph,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _cube_lod() -> MeshLOD:
    """8 corner vertices, 12 triangles (36 indices)."""
    corners = [
        (x, y, z) for z in (0.0, 1.0) for y in (0.0, 1.0) for x in (0.0, 1.0)
    ]
    vertices = [Vertex(position=c, uv=(c[0], c[1])) for c in corners]
    faces = [
        (0, 1, 3), (0, 3, 2),
        (4, 6, 7), (4, 7, 5),
        (0, 4, 5), (0, 5, 1),
        (2, 3, 7), (2, 7, 6),
        (0, 2, 6), (0, 6, 4),
        (1, 5, 7), (1, 7, 3),
    ]
    return MeshLOD(vertices=vertices, indices=[i for f in faces for i in f])


def _two_bone_skeleton() -> Skeleton:
    return Skeleton(
        name="SK_Test",
        bones=[Bone(name="root", parent_index=-1), Bone(name="child", parent_index=0)],
        reference_pose=[
            Transform(),
            Transform(translation=(0.0, 0.0, 10.0)),
        ],
    )


# ---------------------------------------------------------------------------
# Primitive writer / reader
# ---------------------------------------------------------------------------


class TestBinaryPrimitives:
    def test_string_is_length_prefixed_with_nul(self) -> None:
        writer = BinaryWriter()
        writer.string("abc")
        assert writer.getvalue() == struct.pack("<i", 4) + b"abc\x00"

    def test_empty_string_is_zero_length(self) -> None:
        writer = BinaryWriter()
        writer.string("")
        assert writer.getvalue() == struct.pack("<i", 0)

    def test_reader_reads_strings_back(self) -> None:
        writer = BinaryWriter()
        writer.string("Bone_01")
        writer.string("")
        reader = BinaryReader(writer.getvalue())
        assert reader.string() == "Bone_01"
        assert reader.string() == ""
        assert reader.remaining == 0

    def test_truncated_stream_raises(self) -> None:
        reader = BinaryReader(b"\x01\x00")
        with pytest.raises(ExportError) as excinfo:
            reader.int32()
        assert excinfo.value.kind is ErrorKind.SERIALIZATION_FAILURE

    def test_out_of_range_int_is_serialization_failure(self) -> None:
        writer = BinaryWriter()
        with pytest.raises(ExportError) as excinfo:
            writer.int32(2**40)
        assert excinfo.value.kind is ErrorKind.SERIALIZATION_FAILURE


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


class TestGeometryCodec:
    def test_cube_lod0_is_336_bytes(self) -> None:
        data = encode_mesh(_cube_lod())
        assert len(data) == 336
        assert encoded_size(8, 36) == 336

    @pytest.mark.parametrize("vertex_count,index_count", [(0, 0), (1, 3), (100, 300)])
    def test_size_formula(self, vertex_count: int, index_count: int) -> None:
        lod = MeshLOD(
            vertices=[Vertex() for _ in range(vertex_count)],
            indices=[i % max(vertex_count, 1) for i in range(index_count)],
        )
        data = encode_mesh(lod)
        assert len(data) == 4 + vertex_count * 32 + 4 + index_count * 2

    def test_counts_precede_data(self) -> None:
        lod = _cube_lod()
        data = encode_mesh(lod)
        assert struct.unpack_from("<i", data, 0)[0] == 8
        assert struct.unpack_from("<i", data, 4 + 8 * 32)[0] == 36

    def test_vertex_layout(self) -> None:
        lod = MeshLOD(
            vertices=[Vertex(position=(1.0, 2.0, 3.0), tangent_z=(0.0, 1.0, 0.0, 1.0), uv=(0.25, 0.75))],
            indices=[0],
        )
        data = encode_mesh(lod)
        assert struct.unpack_from("<8f", data, 4) == (1.0, 2.0, 3.0, 0.0, 1.0, 0.0, 0.25, 0.75)

    def test_index_above_16_bits_wraps(self) -> None:
        wrapped = encode_mesh(MeshLOD(indices=[65537]))
        plain = encode_mesh(MeshLOD(indices=[1]))
        assert wrapped == plain
        assert wrapped[-2:] == struct.pack("<H", 1)

    def test_no_cpu_access_fails(self) -> None:
        with pytest.raises(ExportError) as excinfo:
            encode_mesh(_cube_lod(), allow_cpu_access=False)
        assert excinfo.value.kind is ErrorKind.NO_CPU_ACCESS

    def test_only_lod0_is_encoded(self) -> None:
        lod0 = _cube_lod()
        lod1 = MeshLOD(vertices=[Vertex()], indices=[0, 0, 0])
        mesh = StaticMesh(name="SM_Cube", lods=[lod0, lod1])
        assert encode_mesh_asset(mesh) == encode_mesh(lod0)

    def test_mesh_without_lods_fails(self) -> None:
        with pytest.raises(ExportError) as excinfo:
            encode_mesh_asset(StaticMesh(name="SM_Empty"))
        assert excinfo.value.kind is ErrorKind.SERIALIZATION_FAILURE

    def test_asset_without_cpu_access_fails(self) -> None:
        mesh = StaticMesh(name="SM_Locked", allow_cpu_access=False, lods=[_cube_lod()])
        with pytest.raises(ExportError) as excinfo:
            encode_mesh_asset(mesh)
        assert excinfo.value.kind is ErrorKind.NO_CPU_ACCESS

    def test_normal_conventions(self) -> None:
        tangent = (0.0, 0.0, 1.0, -1.0)
        assert decode_normal(tangent) == (0.0, 0.0, 1.0)
        assert decode_normal(tangent, NormalConvention.HANDEDNESS_SCALED) == (-0.0, -0.0, -1.0)

    def test_normal_convention_applies_to_stream(self) -> None:
        lod = MeshLOD(vertices=[Vertex(tangent_z=(0.0, 0.0, 1.0, -1.0))])
        raw = encode_mesh(lod)
        scaled = encode_mesh(lod, normal_convention=NormalConvention.HANDEDNESS_SCALED)
        assert struct.unpack_from("<3f", raw, 16)[2] == 1.0
        assert struct.unpack_from("<3f", scaled, 16)[2] == -1.0

    def test_decode_reads_back_positions_and_indices(self) -> None:
        lod = _cube_lod()
        decoded = decode_mesh(encode_mesh(lod))
        assert [v.position for v in decoded.vertices] == [v.position for v in lod.vertices]
        assert decoded.indices == lod.indices


# ---------------------------------------------------------------------------
# Skeleton
# ---------------------------------------------------------------------------


class TestSkeletonCodec:
    def test_layout_size(self) -> None:
        skeleton = _two_bone_skeleton()
        data = encode_skeleton(skeleton.bones, skeleton.reference_pose)
        # count + ("root\0": 4+5+4) + ("child\0": 4+6+4) + count + 2 * 40
        assert len(data) == 4 + 13 + 14 + 4 + 80

    def test_parent_indices_written(self) -> None:
        skeleton = _two_bone_skeleton()
        data = encode_skeleton(skeleton.bones, skeleton.reference_pose)
        assert struct.unpack_from("<i", data, 0)[0] == 2
        assert struct.unpack_from("<i", data, 4 + 4 + 5)[0] == -1
        assert struct.unpack_from("<i", data, 4 + 13 + 4 + 6)[0] == 0

    def test_decode_round_trip(self) -> None:
        skeleton = _two_bone_skeleton()
        decoded = decode_skeleton(
            encode_skeleton(skeleton.bones, skeleton.reference_pose), name="SK_Test"
        )
        assert decoded.bones == skeleton.bones
        assert decoded.reference_pose[1].translation == (0.0, 0.0, 10.0)
        assert decoded.reference_pose[0].rotation == (0.0, 0.0, 0.0, 1.0)

    def test_mismatched_counts_are_written_but_rejected_on_read(self) -> None:
        bones = [Bone(name="root"), Bone(name="child", parent_index=0)]
        data = encode_skeleton(bones, [Transform()])
        with pytest.raises(ExportError) as excinfo:
            decode_skeleton(data)
        assert excinfo.value.kind is ErrorKind.SERIALIZATION_FAILURE

    def test_forward_parent_reference_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Skeleton(
                name="SK_Bad",
                bones=[Bone(name="a", parent_index=1), Bone(name="b", parent_index=-1)],
            )

    def test_self_parent_reference_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Skeleton(name="SK_Bad", bones=[Bone(name="a", parent_index=0)])

    def test_accepted_skeletons_have_preceding_parents(self) -> None:
        skeleton = Skeleton(
            name="SK_Forest",
            bones=[
                Bone(name="a"),
                Bone(name="b", parent_index=0),
                Bone(name="c"),
                Bone(name="d", parent_index=2),
                Bone(name="e", parent_index=1),
            ],
        )
        for i, bone in enumerate(skeleton.bones):
            assert bone.parent_index == -1 or bone.parent_index < i


# ---------------------------------------------------------------------------
# Animation
# ---------------------------------------------------------------------------


class TestAnimationCodec:
    def test_track_layout(self) -> None:
        tracks = [
            AnimationTrack(
                scale_keys=[(1.0, 1.0, 1.0)],
                rotation_keys=[(0.0, 0.0, 0.0, 1.0), (0.0, 0.0, 1.0, 0.0)],
                position_keys=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (2.0, 0.0, 0.0)],
            )
        ]
        data = encode_animation(tracks)
        assert len(data) == 4 + (4 + 12) + (4 + 2 * 16) + (4 + 3 * 12)
        assert struct.unpack_from("<i", data, 0)[0] == 1
        assert struct.unpack_from("<i", data, 4)[0] == 1
        assert struct.unpack_from("<i", data, 4 + 16)[0] == 2

    def test_empty_clip(self) -> None:
        assert encode_animation([]) == struct.pack("<i", 0)

    def test_decode_round_trip(self) -> None:
        tracks = [
            AnimationTrack(
                scale_keys=[(1.0, 1.0, 1.0)],
                rotation_keys=[(0.0, 0.0, 0.0, 1.0)],
                position_keys=[(0.5, 0.25, 0.0)],
            ),
            AnimationTrack(),
        ]
        assert decode_animation(encode_animation(tracks)) == tracks


# ---------------------------------------------------------------------------
# Composite scene file
# ---------------------------------------------------------------------------


class TestMapCodec:
    def test_empty_map_is_four_zero_counts(self) -> None:
        assert encode_map(SceneGraph()) == struct.pack("<4i", 0, 0, 0, 0)

    def test_sections_in_fixed_order(self) -> None:
        graph = SceneGraph(
            cameras=[CameraRecord(location=(0, 0, 0), look_at=(100, 0, 0), fov=90.0, aspect_ratio=1.5)],
            lights=[LightRecord(color=(1, 1, 1), direction=(0, 0, -1), intensity=3.0)],
            static_meshes=[
                MeshInstanceRecord(rotation=(0, 0, 0, 1), location=(1, 2, 3), resource_name="SM_A"),
                MeshInstanceRecord(rotation=(0, 0, 0, 1), location=(4, 5, 6), resource_name="SM_B"),
            ],
        )
        data = encode_map(graph)
        assert struct.unpack_from("<i", data, 0)[0] == 1
        assert struct.unpack_from("<i", data, 4 + 32)[0] == 1
        assert struct.unpack_from("<i", data, 4 + 32 + 4 + 28)[0] == 2

        decoded = decode_map(data)
        assert decoded.section_counts() == (1, 1, 2, 0)
        assert [r.resource_name for r in decoded.static_meshes] == ["SM_A", "SM_B"]
        assert decoded.cameras[0].look_at == (100.0, 0.0, 0.0)
