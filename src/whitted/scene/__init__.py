"""Scene assembly: the world, OBJ ingestion and demo scenes.

Components:
    world: Root objects, the light, and recursive shading
    obj_parser: Wavefront OBJ/MTL parser producing triangle groups
    showcase: A demo scene exercising every feature
"""

from .obj_parser import ObjParser, parse_obj, parse_obj_directory, parse_obj_file
from .world import World, default_world

# Note: showcase is NOT imported here; it pulls in the camera and renderer.
#   from src.whitted.scene.showcase import create_showcase_scene

__all__ = [
    "World",
    "default_world",
    "ObjParser",
    "parse_obj",
    "parse_obj_file",
    "parse_obj_directory",
]
