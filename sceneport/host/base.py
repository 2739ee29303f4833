"""Host collaborators: scene queries, texture export, and path validation.

The exporter never talks to an engine directly.  A host adapter implements
:class:`SceneQuery` (and optionally :class:`TextureExporter`) on top of
whatever live session it wraps.
"""

from __future__ import annotations

import abc
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Sequence, TypeVar, Union

from pydantic import BaseModel, Field

from sceneport.models.assets import AnimSequence, SkeletalMesh, StaticMesh, Transform, Vec3

logger = logging.getLogger(__name__)


class ActorCategory(str, Enum):
    """Entity categories, listed in the order the scene exporter visits them."""

    CAMERA = "camera"
    DIRECTIONAL_LIGHT = "directional_light"
    STATIC_MESH = "static_mesh"
    SKELETAL_MESH = "skeletal_mesh"


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


class CameraComponent(BaseModel):
    type: Literal["camera"] = "camera"
    fov: float = 90.0
    aspect_ratio: float = 16.0 / 9.0


class LightComponent(BaseModel):
    type: Literal["light"] = "light"
    color: Vec3 = (1.0, 1.0, 1.0)
    intensity: float = 1.0


class StaticMeshComponent(BaseModel):
    type: Literal["static_mesh"] = "static_mesh"
    mesh: StaticMesh | None = None


class SkeletalMeshComponent(BaseModel):
    type: Literal["skeletal_mesh"] = "skeletal_mesh"
    mesh: SkeletalMesh | None = None
    animation: AnimSequence | None = None


Component = Annotated[
    Union[CameraComponent, LightComponent, StaticMeshComponent, SkeletalMeshComponent],
    Field(discriminator="type"),
]

C = TypeVar("C", CameraComponent, LightComponent, StaticMeshComponent, SkeletalMeshComponent)


class Actor(BaseModel):
    """A scene entity with its world transform and attached components."""

    name: str
    category: ActorCategory
    transform: Transform = Field(default_factory=Transform)
    components: list[Component] = Field(default_factory=list)

    def find_component(self, component_type: type[C]) -> C | None:
        for component in self.components:
            if isinstance(component, component_type):
                return component
        return None


# ---------------------------------------------------------------------------
# Collaborator interfaces
# ---------------------------------------------------------------------------


class SceneQuery(abc.ABC):
    """Read-only view of a live scene."""

    @abc.abstractmethod
    def actors(self, category: ActorCategory) -> list[Actor]:
        """Return every actor of *category*, in a stable order."""

    def world_transform(self, actor: Actor) -> Transform:
        return actor.transform


class TextureExporter(abc.ABC):
    """Generic asset exporter used for best-effort texture output."""

    @abc.abstractmethod
    def export_textures(self, directory: Path, textures: Sequence[str]) -> bool:
        """Write *textures* into *directory*; return True on success."""

    def is_available(self) -> bool:
        """Return True if this exporter's dependencies are satisfied."""
        return True


class NullTextureExporter(TextureExporter):
    """Placeholder used when the host provides no texture exporter."""

    def export_textures(self, directory: Path, textures: Sequence[str]) -> bool:
        logger.debug("No texture exporter; skipping %d textures", len(textures))
        return False

    def is_available(self) -> bool:
        return False


class PathValidator:
    """Accept destination paths with a usable file name and parent."""

    _INVALID_CHARS = set('<>:"|?*')

    def validate(self, path: str | Path) -> bool:
        if not str(path).strip():
            return False
        path = Path(path)
        if not path.stem or path.name in (".", ".."):
            return False
        if any(ch in self._INVALID_CHARS for ch in path.name):
            return False
        parent = path.parent
        if parent.exists() and not parent.is_dir():
            return False
        return not path.is_dir()
