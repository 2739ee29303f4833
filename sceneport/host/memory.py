"""In-memory scene host, optionally loaded from a JSON snapshot.

Snapshot layout::

    {
      "static_meshes":   [StaticMesh, ...],
      "skeletal_meshes": [SkeletalMesh, ...],
      "animations":      [AnimSequence, ...],
      "actors": [
        {"name": "...", "category": "static_mesh", "transform": {...},
         "components": [{"type": "static_mesh", "mesh": "SM_Cube"}]}
      ]
    }

Components refer to assets by name; unknown names resolve to no asset.
An actor may give its orientation as ``"rotator": [pitch, yaw, roll]`` in
degrees instead of a quaternion; when present it replaces the transform
rotation.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from sceneport.host.base import (
    Actor,
    ActorCategory,
    CameraComponent,
    Component,
    LightComponent,
    SceneQuery,
    SkeletalMeshComponent,
    StaticMeshComponent,
)
from sceneport.models.assets import AnimSequence, SkeletalMesh, StaticMesh, Transform, Vec3
from sceneport.models.transforms import quat_from_rotator

logger = logging.getLogger(__name__)


class InMemoryScene(SceneQuery):
    """A fixed list of actors, returned per category in insertion order."""

    def __init__(self, actors: list[Actor] | None = None) -> None:
        self._actors: list[Actor] = list(actors or [])

    def add(self, actor: Actor) -> Actor:
        self._actors.append(actor)
        return actor

    def actors(self, category: ActorCategory) -> list[Actor]:
        return [a for a in self._actors if a.category == category]

    @classmethod
    def from_snapshot(cls, path: str | Path) -> InMemoryScene:
        """Build a scene from a JSON snapshot file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        snapshot = SceneSnapshot.model_validate(data)
        return cls(snapshot.resolve_actors())


# ---------------------------------------------------------------------------
# Snapshot schema
# ---------------------------------------------------------------------------


class SnapshotComponent(BaseModel):
    type: Literal["camera", "light", "static_mesh", "skeletal_mesh"]
    fov: float = 90.0
    aspect_ratio: float = 16.0 / 9.0
    color: Vec3 = (1.0, 1.0, 1.0)
    intensity: float = 1.0
    mesh: str | None = None
    animation: str | None = None


class SnapshotActor(BaseModel):
    name: str
    category: ActorCategory
    transform: Transform = Field(default_factory=Transform)
    rotator: Vec3 | None = None
    components: list[SnapshotComponent] = Field(default_factory=list)


class SceneSnapshot(BaseModel):
    static_meshes: list[StaticMesh] = Field(default_factory=list)
    skeletal_meshes: list[SkeletalMesh] = Field(default_factory=list)
    animations: list[AnimSequence] = Field(default_factory=list)
    actors: list[SnapshotActor] = Field(default_factory=list)

    def resolve_actors(self) -> list[Actor]:
        static = {m.name: m for m in self.static_meshes}
        skeletal = {m.name: m for m in self.skeletal_meshes}
        anims = {a.name: a for a in self.animations}

        actors: list[Actor] = []
        for entry in self.actors:
            transform = entry.transform
            if entry.rotator is not None:
                transform = transform.model_copy(
                    update={"rotation": quat_from_rotator(*entry.rotator)}
                )
            components: list[Component] = []
            for comp in entry.components:
                if comp.type == "camera":
                    components.append(
                        CameraComponent(fov=comp.fov, aspect_ratio=comp.aspect_ratio)
                    )
                elif comp.type == "light":
                    components.append(
                        LightComponent(color=comp.color, intensity=comp.intensity)
                    )
                elif comp.type == "static_mesh":
                    components.append(StaticMeshComponent(mesh=_lookup(static, comp.mesh)))
                else:
                    components.append(
                        SkeletalMeshComponent(
                            mesh=_lookup(skeletal, comp.mesh),
                            animation=_lookup(anims, comp.animation),
                        )
                    )
            actors.append(
                Actor(
                    name=entry.name,
                    category=entry.category,
                    transform=transform,
                    components=components,
                )
            )
        return actors


def _lookup(table: dict, name: str | None):
    if name is None:
        return None
    asset = table.get(name)
    if asset is None:
        logger.warning("Snapshot references unknown asset '%s'", name)
    return asset
