"""A Whitted-style CPU ray tracer.

Renders scenes of spheres, planes, cubes, cylinders, cones, triangle meshes
and CSG solids lit by a single point light, with Phong shading, hard
shadows, recursive reflection and refraction, and procedural patterns.

Subpackages:
    core: Tuples, matrices, rays, canvas, errors and the parallel renderer
    geometry: Shape primitives, groups, CSG and bounding boxes
    materials: Materials, point lights, Phong lighting and patterns
    scene: The world, the OBJ parser and demo scenes
    camera: The pinhole camera
    preview: PPM/PNG export and preview windows
"""

__version__ = "0.1.0"
