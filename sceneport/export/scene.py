"""SceneExporter: enumerate a live scene and write a composite .map file.

Export runs in two phases:

1. **Plan** - visit cameras, directional lights, static mesh instances and
   skeletal mesh instances (in that order), resolve each actor into a typed
   instance, collect its .map record and the asset files it depends on.
2. **Execute** - write every dependent geometry, skeleton and animation file,
   hand textures to the texture exporter, then write the .map file last.

Shared assets are re-exported once per referencing instance, overwriting the
same path each time, unless ``ExportSettings.deduplicate_assets`` is set.
A failure in either phase fails the whole call; side files already written
stay on disk.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sceneport.codecs.animation import encode_animation
from sceneport.codecs.geometry import encode_mesh_asset
from sceneport.codecs.scene import encode_map
from sceneport.codecs.skeleton import encode_skeleton_asset
from sceneport.config import (
    ANIMATION_DIR,
    MESH_DIR,
    SKELETON_DIR,
    TEXTURE_DIR,
    ExportSettings,
    configure_logging,
)
from sceneport.errors import ErrorKind, ExportError
from sceneport.export.base import ExportResult, OutputFormat, format_for_path, write_output
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
from sceneport.models.scene import (
    Camera,
    CameraInstance,
    LightInstance,
    SceneGraph,
    SceneInstance,
    SkeletalMeshInstance,
    StaticMeshInstance,
)

logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r'[<>:"/\\|?*\s]')

_ASSET_DIRS: dict[OutputFormat, str] = {
    OutputFormat.STATIC_MESH: MESH_DIR,
    OutputFormat.SKELETAL_MESH: MESH_DIR,
    OutputFormat.SKELETON: SKELETON_DIR,
    OutputFormat.ANIMATION: ANIMATION_DIR,
}


def asset_file_name(resource_name: str, fmt: OutputFormat) -> str:
    """Deterministic side-file name for a resource."""
    stem = _UNSAFE_NAME_CHARS.sub("_", resource_name.strip()) or "unnamed"
    return f"{stem}{fmt.value}"


@dataclass
class AssetDependency:
    """One side file the scene needs written before the .map file."""

    kind: OutputFormat
    resource_name: str
    asset: Any
    destination: Path


@dataclass
class ExportPlan:
    graph: SceneGraph = field(default_factory=SceneGraph)
    dependencies: list[AssetDependency] = field(default_factory=list)
    textures: list[str] = field(default_factory=list)


class SceneExporter:
    """Export a whole scene through the host's :class:`SceneQuery`.

    Parameters
    ----------
    scene:
        Host scene to enumerate.
    texture_exporter:
        Optional collaborator for best-effort texture output.
    path_validator:
        Destination check run before anything is written.
    settings:
        Normal convention, look-at distance and deduplication switch.
        When given, its ``log_level`` is applied to the ``sceneport`` logger.
    logger:
        Logger for progress and failure lines.  Defaults to this module's.
    """

    def __init__(
        self,
        scene: SceneQuery,
        *,
        texture_exporter: TextureExporter | None = None,
        path_validator: PathValidator | None = None,
        settings: ExportSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._scene = scene
        self._textures = texture_exporter or NullTextureExporter()
        self._validator = path_validator or PathValidator()
        if settings is not None:
            configure_logging(settings.log_level)
        self._settings = settings or ExportSettings()
        self._log = logger or logging.getLogger(__name__)

    # -- Public API -----------------------------------------------------------

    def export(self, destination: str | Path) -> ExportResult:
        """Write the composite scene file and every dependent asset file."""
        path = Path(destination)
        side_files: list[Path] = []
        try:
            if not self._validator.validate(path):
                raise ExportError(
                    ErrorKind.INVALID_DESTINATION_PATH, f"invalid destination: {path}"
                )
            format_for_path(path, {OutputFormat.MAP: None})

            plan = self.plan(path.parent)

            for dep in plan.dependencies:
                self._export_dependency(dep)
                side_files.append(dep.destination)

            self._export_textures(path.parent / TEXTURE_DIR, plan.textures)

            write_output(path, encode_map(plan.graph))
        except ExportError as exc:
            self._log.warning(
                "export_map: failed (%s): %s", exc.kind.value, exc.message
            )
            result = ExportResult.failure(exc, OutputFormat.MAP.value)
            result.side_files = side_files
            return result

        counts = plan.graph.section_counts()
        self._log.info(
            "export_map: success (%s) cameras=%d lights=%d static=%d skeletal=%d",
            path, *counts,
        )
        return ExportResult(
            file_path=path,
            format=OutputFormat.MAP.value,
            message=f"export_map wrote {path.name} and {len(side_files)} asset files",
            side_files=side_files,
        )

    def plan(self, output_dir: Path) -> ExportPlan:
        """Enumerate the scene and collect records plus dependent exports."""
        plan = ExportPlan()
        seen: set[tuple[OutputFormat, str]] = set()

        for category in ActorCategory:
            actors = self._scene.actors(category)
            self._log.debug("Enumerated %d %s actors", len(actors), category.value)
            for actor in actors:
                instance = self.resolve(actor, category)
                self._add_instance(plan, instance, output_dir, seen)

        return plan

    def resolve(self, actor: Actor, category: ActorCategory) -> SceneInstance:
        """Turn a host actor into its typed instance variant."""
        transform = self._scene.world_transform(actor)

        if category is ActorCategory.CAMERA:
            comp = _require(actor, CameraComponent)
            return CameraInstance(
                actor_name=actor.name,
                camera=Camera(
                    name=actor.name,
                    location=transform.translation,
                    rotation=transform.rotation,
                    fov=comp.fov,
                    aspect_ratio=comp.aspect_ratio,
                ),
            )

        if category is ActorCategory.DIRECTIONAL_LIGHT:
            comp = _require(actor, LightComponent)
            return LightInstance(
                actor_name=actor.name,
                transform=transform,
                color=comp.color,
                intensity=comp.intensity,
            )

        if category is ActorCategory.STATIC_MESH:
            comp = _require(actor, StaticMeshComponent)
            if comp.mesh is None:
                raise ExportError(
                    ErrorKind.NULL_SOURCE_ASSET,
                    f"actor {actor.name!r} has no static mesh assigned",
                )
            return StaticMeshInstance(
                actor_name=actor.name, transform=transform, mesh=comp.mesh
            )

        comp = _require(actor, SkeletalMeshComponent)
        if comp.mesh is None or comp.mesh.skeleton is None:
            raise ExportError(
                ErrorKind.NULL_SOURCE_ASSET,
                f"actor {actor.name!r} has no skeletal mesh or skeleton assigned",
            )
        return SkeletalMeshInstance(
            actor_name=actor.name,
            transform=transform,
            mesh=comp.mesh,
            animation=comp.animation,
        )

    # -- Internals ------------------------------------------------------------

    def _add_instance(
        self,
        plan: ExportPlan,
        instance: SceneInstance,
        output_dir: Path,
        seen: set[tuple[OutputFormat, str]],
    ) -> None:
        graph = plan.graph

        def depend(kind: OutputFormat, name: str, asset: Any) -> None:
            key = (kind, name)
            if self._settings.deduplicate_assets and key in seen:
                return
            seen.add(key)
            plan.dependencies.append(
                AssetDependency(
                    kind=kind,
                    resource_name=name,
                    asset=asset,
                    destination=output_dir / _ASSET_DIRS[kind] / asset_file_name(name, kind),
                )
            )

        if isinstance(instance, CameraInstance):
            graph.cameras.append(instance.to_record(self._settings.look_at_distance))
        elif isinstance(instance, LightInstance):
            graph.lights.append(instance.to_record())
        elif isinstance(instance, StaticMeshInstance):
            graph.static_meshes.append(instance.to_record())
            depend(OutputFormat.STATIC_MESH, instance.mesh.name, instance.mesh)
            plan.textures.extend(instance.mesh.textures)
        else:
            graph.skeletal_meshes.append(instance.to_record())
            mesh = instance.mesh
            depend(OutputFormat.SKELETAL_MESH, mesh.name, mesh)
            depend(OutputFormat.SKELETON, mesh.skeleton.name, mesh.skeleton)
            if instance.animation is not None:
                depend(OutputFormat.ANIMATION, instance.animation.name, instance.animation)
            plan.textures.extend(mesh.textures)

    def _export_dependency(self, dep: AssetDependency) -> None:
        if dep.kind in (OutputFormat.STATIC_MESH, OutputFormat.SKELETAL_MESH):
            payload = encode_mesh_asset(dep.asset, self._settings.normal_convention)
        elif dep.kind is OutputFormat.SKELETON:
            payload = encode_skeleton_asset(dep.asset)
        else:
            payload = encode_animation(dep.asset.tracks)
        write_output(dep.destination, payload)
        self._log.debug("Wrote %s %s", dep.kind.name.lower(), dep.destination)

    def _export_textures(self, directory: Path, textures: list[str]) -> None:
        if not textures:
            return
        if not self._textures.is_available():
            self._log.debug("Texture exporter unavailable; skipping textures")
            return
        try:
            ok = self._textures.export_textures(directory, textures)
        except Exception as exc:
            self._log.warning("Texture export raised %s; continuing", exc)
            return
        if not ok:
            self._log.warning("Texture export to %s reported failure", directory)


def _require(actor: Actor, component_type: type) -> Any:
    component = actor.find_component(component_type)
    if component is None:
        raise ExportError(
            ErrorKind.MISSING_EXPECTED_COMPONENT,
            f"actor {actor.name!r} has no {component_type.__name__}",
        )
    return component


def export_map(
    scene: SceneQuery,
    path: str | Path,
    **kwargs: Any,
) -> ExportResult:
    """Convenience wrapper around :meth:`SceneExporter.export`."""
    return SceneExporter(scene, **kwargs).export(path)
