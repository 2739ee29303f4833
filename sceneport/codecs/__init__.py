"""Codecs: pure functions from typed assets to bytes or JSON documents."""

from sceneport.codecs.animation import decode_animation, encode_animation
from sceneport.codecs.geometry import decode_mesh, encode_mesh, encode_mesh_asset
from sceneport.codecs.json_format import encode_camera_json, encode_mesh_json
from sceneport.codecs.scene import decode_map, encode_map
from sceneport.codecs.skeleton import (
    decode_skeleton,
    encode_skeleton,
    encode_skeleton_asset,
)

__all__ = [
    "decode_animation",
    "decode_map",
    "decode_mesh",
    "decode_skeleton",
    "encode_animation",
    "encode_camera_json",
    "encode_map",
    "encode_mesh",
    "encode_mesh_asset",
    "encode_mesh_json",
    "encode_skeleton",
    "encode_skeleton_asset",
]
