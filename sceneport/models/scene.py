"""Scene model: resolved instance variants and the fixed-layout .map records.

Scene entities are resolved from host actors into one of four closed
variants, each carrying strongly typed fields.  Every variant knows how to
produce the record that ends up in the composite scene file.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from sceneport.config import CAMERA_LOOK_AT_DISTANCE
from sceneport.models.assets import (
    AnimSequence,
    Quat,
    SkeletalMesh,
    StaticMesh,
    Transform,
    Vec3,
)
from sceneport.models.transforms import forward_vector, quat_to_rotator


class Camera(BaseModel):
    """Camera state as seen in world space."""

    name: str = ""
    location: Vec3 = (0.0, 0.0, 0.0)
    rotation: Quat = (0.0, 0.0, 0.0, 1.0)
    fov: float = 90.0
    aspect_ratio: float = 16.0 / 9.0

    def forward(self) -> Vec3:
        return forward_vector(self.rotation)

    def rotator(self) -> tuple[float, float, float]:
        """``(pitch, yaw, roll)`` in degrees."""
        return quat_to_rotator(self.rotation)

    def look_at_target(self, distance: float = CAMERA_LOOK_AT_DISTANCE) -> Vec3:
        fx, fy, fz = self.forward()
        lx, ly, lz = self.location
        return (lx + fx * distance, ly + fy * distance, lz + fz * distance)


# ---------------------------------------------------------------------------
# Composite file records
# ---------------------------------------------------------------------------


class CameraRecord(BaseModel):
    location: Vec3
    look_at: Vec3
    fov: float
    aspect_ratio: float


class LightRecord(BaseModel):
    color: Vec3
    direction: Vec3
    intensity: float


class MeshInstanceRecord(BaseModel):
    """Shared by static and skeletal mesh instances."""

    rotation: Quat
    location: Vec3
    resource_name: str


class SceneGraph(BaseModel):
    """The four record sections of a .map file, in their fixed order."""

    cameras: list[CameraRecord] = Field(default_factory=list)
    lights: list[LightRecord] = Field(default_factory=list)
    static_meshes: list[MeshInstanceRecord] = Field(default_factory=list)
    skeletal_meshes: list[MeshInstanceRecord] = Field(default_factory=list)

    def section_counts(self) -> tuple[int, int, int, int]:
        return (
            len(self.cameras),
            len(self.lights),
            len(self.static_meshes),
            len(self.skeletal_meshes),
        )


# ---------------------------------------------------------------------------
# Resolved instance variants
# ---------------------------------------------------------------------------


class CameraInstance(BaseModel):
    kind: Literal["camera"] = "camera"
    actor_name: str
    camera: Camera

    def to_record(self, look_at_distance: float = CAMERA_LOOK_AT_DISTANCE) -> CameraRecord:
        return CameraRecord(
            location=self.camera.location,
            look_at=self.camera.look_at_target(look_at_distance),
            fov=self.camera.fov,
            aspect_ratio=self.camera.aspect_ratio,
        )


class LightInstance(BaseModel):
    kind: Literal["light"] = "light"
    actor_name: str
    transform: Transform
    color: Vec3 = (1.0, 1.0, 1.0)
    intensity: float = 1.0

    def to_record(self) -> LightRecord:
        return LightRecord(
            color=self.color,
            direction=forward_vector(self.transform.rotation),
            intensity=self.intensity,
        )


class StaticMeshInstance(BaseModel):
    kind: Literal["static_mesh"] = "static_mesh"
    actor_name: str
    transform: Transform
    mesh: StaticMesh

    def to_record(self) -> MeshInstanceRecord:
        return MeshInstanceRecord(
            rotation=self.transform.rotation,
            location=self.transform.translation,
            resource_name=self.mesh.name,
        )


class SkeletalMeshInstance(BaseModel):
    kind: Literal["skeletal_mesh"] = "skeletal_mesh"
    actor_name: str
    transform: Transform
    mesh: SkeletalMesh
    animation: AnimSequence | None = None

    def to_record(self) -> MeshInstanceRecord:
        return MeshInstanceRecord(
            rotation=self.transform.rotation,
            location=self.transform.translation,
            resource_name=self.mesh.name,
        )


SceneInstance = Annotated[
    Union[CameraInstance, LightInstance, StaticMeshInstance, SkeletalMeshInstance],
    Field(discriminator="kind"),
]
