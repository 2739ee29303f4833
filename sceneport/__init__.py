"""sceneport - serialize live 3D scene data into portable mesh, skeleton,
animation, camera and composite scene files."""

__version__ = "1.0.0"

from sceneport.config import ExportSettings, NormalConvention, load_settings
from sceneport.errors import ErrorKind, ExportError
from sceneport.export import (
    ExportResult,
    SceneExporter,
    export_anim_sequence,
    export_camera,
    export_map,
    export_skeletal_mesh,
    export_skeleton,
    export_static_mesh,
)
from sceneport.host import InMemoryScene, SceneQuery, TextureExporter

__all__ = [
    "__version__",
    "ErrorKind",
    "ExportError",
    "ExportResult",
    "ExportSettings",
    "InMemoryScene",
    "NormalConvention",
    "SceneExporter",
    "SceneQuery",
    "TextureExporter",
    "export_anim_sequence",
    "export_camera",
    "export_map",
    "export_skeletal_mesh",
    "export_skeleton",
    "export_static_mesh",
    "load_settings",
]
