"""Export operations: per-asset files and the composite scene file."""

from sceneport.export.assets import (
    export_anim_sequence,
    export_camera,
    export_skeletal_mesh,
    export_skeleton,
    export_static_mesh,
)
from sceneport.export.base import ExportResult, OutputFormat
from sceneport.export.scene import SceneExporter, export_map

__all__ = [
    "ExportResult",
    "OutputFormat",
    "SceneExporter",
    "export_anim_sequence",
    "export_camera",
    "export_map",
    "export_skeletal_mesh",
    "export_skeleton",
    "export_static_mesh",
]
