"""Asset models: meshes, skeletons, and animation clips captured from the host.

These mirror what the engine hands over at export time.  Nothing here is
persisted between calls; the codecs turn them into bytes or JSON documents.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]
Quat = tuple[float, float, float, float]

IDENTITY_QUAT: Quat = (0.0, 0.0, 0.0, 1.0)


class Vertex(BaseModel):
    """One render vertex.

    ``tangent_z`` is the packed tangent-basis normal: XYZ is the normal
    direction and W holds the binormal handedness sign.
    """

    position: Vec3 = (0.0, 0.0, 0.0)
    tangent_z: Quat = (0.0, 0.0, 1.0, 1.0)
    uv: Vec2 = (0.0, 0.0)


class MeshLOD(BaseModel):
    """A single level of detail: vertex buffer plus triangle index list."""

    vertices: list[Vertex] = Field(default_factory=list)
    indices: list[int] = Field(default_factory=list)


class StaticMesh(BaseModel):
    """A static (non-deforming) mesh asset."""

    name: str
    allow_cpu_access: bool = True
    lods: list[MeshLOD] = Field(default_factory=list)
    textures: list[str] = Field(default_factory=list)


class Transform(BaseModel):
    """Translation, rotation (x, y, z, w quaternion) and scale."""

    translation: Vec3 = (0.0, 0.0, 0.0)
    rotation: Quat = IDENTITY_QUAT
    scale: Vec3 = (1.0, 1.0, 1.0)


class Bone(BaseModel):
    """A node in a skeleton hierarchy.  ``parent_index == -1`` marks a root."""

    name: str
    parent_index: int = -1


class Skeleton(BaseModel):
    """Bone hierarchy plus reference pose, aligned by position."""

    name: str
    bones: list[Bone] = Field(default_factory=list)
    reference_pose: list[Transform] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_parent_order(self) -> Skeleton:
        for i, bone in enumerate(self.bones):
            if bone.parent_index != -1 and not 0 <= bone.parent_index < i:
                raise ValueError(
                    f"bone {i} ({bone.name!r}) has parent index "
                    f"{bone.parent_index}; parents must precede their children"
                )
        return self


class SkeletalMesh(StaticMesh):
    """A skinned mesh bound to a skeleton."""

    skeleton: Skeleton | None = None


class AnimationTrack(BaseModel):
    """Keyframes for one bone.

    A key list of length 1 is constant for the whole clip; longer lists hold
    one sample per frame.  The three lists are independent in length.
    """

    scale_keys: list[Vec3] = Field(default_factory=list)
    rotation_keys: list[Quat] = Field(default_factory=list)
    position_keys: list[Vec3] = Field(default_factory=list)


class AnimSequence(BaseModel):
    """An animation clip; ``tracks`` follow the skeleton's bone order."""

    name: str
    skeleton_name: str = ""
    frame_count: int = 0
    tracks: list[AnimationTrack] = Field(default_factory=list)
