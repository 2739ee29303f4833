"""Binary animation codec (.anm).

One track per bone, in skeleton bone order; no bone id is stored.  Each track
holds three independently sized key arrays: scale (3 floats), rotation
(4 floats) and position (3 floats).
"""

from __future__ import annotations

from typing import Sequence

from sceneport.codecs.binary import BinaryReader, BinaryWriter
from sceneport.models.assets import AnimationTrack


def encode_animation(tracks: Sequence[AnimationTrack]) -> bytes:
    writer = BinaryWriter()
    writer.int32(len(tracks))
    for track in tracks:
        writer.int32(len(track.scale_keys))
        for key in track.scale_keys:
            writer.floats(key)
        writer.int32(len(track.rotation_keys))
        for key in track.rotation_keys:
            writer.floats(key)
        writer.int32(len(track.position_keys))
        for key in track.position_keys:
            writer.floats(key)
    return writer.getvalue()


def decode_animation(data: bytes) -> list[AnimationTrack]:
    reader = BinaryReader(data)
    tracks: list[AnimationTrack] = []
    for _ in range(reader.count()):
        scale = [reader.floats(3) for _ in range(reader.count())]
        rotation = [reader.floats(4) for _ in range(reader.count())]
        position = [reader.floats(3) for _ in range(reader.count())]
        tracks.append(
            AnimationTrack(
                scale_keys=scale, rotation_keys=rotation, position_keys=position
            )
        )
    return tracks
