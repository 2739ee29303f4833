"""Host adapters and collaborator interfaces."""

from sceneport.host.base import (
    Actor,
    ActorCategory,
    CameraComponent,
    LightComponent,
    NullTextureExporter,
    PathValidator,
    SceneQuery,
    SkeletalMeshComponent,
    StaticMeshComponent,
    TextureExporter,
)
from sceneport.host.memory import InMemoryScene, SceneSnapshot

__all__ = [
    "Actor",
    "ActorCategory",
    "CameraComponent",
    "InMemoryScene",
    "LightComponent",
    "NullTextureExporter",
    "PathValidator",
    "SceneQuery",
    "SceneSnapshot",
    "SkeletalMeshComponent",
    "StaticMeshComponent",
    "TextureExporter",
]
