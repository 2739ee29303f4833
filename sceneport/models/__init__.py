"""Asset and scene models."""

from sceneport.models.assets import (
    AnimationTrack,
    AnimSequence,
    Bone,
    MeshLOD,
    SkeletalMesh,
    Skeleton,
    StaticMesh,
    Transform,
    Vertex,
)
from sceneport.models.scene import (
    Camera,
    CameraInstance,
    CameraRecord,
    LightInstance,
    LightRecord,
    MeshInstanceRecord,
    SceneGraph,
    SceneInstance,
    SkeletalMeshInstance,
    StaticMeshInstance,
)

__all__ = [
    "AnimSequence",
    "AnimationTrack",
    "Bone",
    "Camera",
    "CameraInstance",
    "CameraRecord",
    "LightInstance",
    "LightRecord",
    "MeshInstanceRecord",
    "MeshLOD",
    "SceneGraph",
    "SceneInstance",
    "SkeletalMesh",
    "SkeletalMeshInstance",
    "Skeleton",
    "StaticMesh",
    "StaticMeshInstance",
    "Transform",
    "Vertex",
]
