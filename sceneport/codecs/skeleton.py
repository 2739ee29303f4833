"""Binary skeleton codec (.skt).

Layout, little-endian::

    int32  boneCount
    boneCount x { string name, int32 parentIndex }
    int32  poseCount
    poseCount x { float32[3] translation, float32[4] rotation, float32[3] scale }

The two counts are written in separate passes and are not cross-checked on
write.  :func:`decode_skeleton` rejects a stream where they differ.
"""

from __future__ import annotations

from typing import Sequence

from sceneport.codecs.binary import BinaryReader, BinaryWriter
from sceneport.errors import ErrorKind, ExportError
from sceneport.models.assets import Bone, Skeleton, Transform


def encode_skeleton(bones: Sequence[Bone], pose: Sequence[Transform]) -> bytes:
    writer = BinaryWriter()

    writer.int32(len(bones))
    for bone in bones:
        writer.string(bone.name)
        writer.int32(bone.parent_index)

    writer.int32(len(pose))
    for transform in pose:
        writer.floats(transform.translation)
        writer.floats(transform.rotation)
        writer.floats(transform.scale)

    return writer.getvalue()


def encode_skeleton_asset(skeleton: Skeleton) -> bytes:
    return encode_skeleton(skeleton.bones, skeleton.reference_pose)


def decode_skeleton(data: bytes, name: str = "") -> Skeleton:
    reader = BinaryReader(data)

    bones = [
        Bone(name=reader.string(), parent_index=reader.int32())
        for _ in range(reader.count())
    ]

    pose_count = reader.count()
    if pose_count != len(bones):
        raise ExportError(
            ErrorKind.SERIALIZATION_FAILURE,
            f"skeleton has {len(bones)} bones but {pose_count} pose entries",
        )
    pose = [
        Transform(
            translation=reader.floats(3),
            rotation=reader.floats(4),
            scale=reader.floats(3),
        )
        for _ in range(pose_count)
    ]

    try:
        return Skeleton(name=name, bones=bones, reference_pose=pose)
    except ValueError as exc:
        raise ExportError(ErrorKind.SERIALIZATION_FAILURE, str(exc)) from exc
