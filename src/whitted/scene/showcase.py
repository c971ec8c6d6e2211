"""Showcase scene configuration.

This module provides factory functions for a demo scene that exercises every
feature of the tracer at once:

- Checkered floor and a perturbed striped back wall (patterns, noise)
- A glass sphere with an air bubble (refraction, Fresnel blending)
- A mirror sphere (reflection)
- A die carved with CSG (intersection and difference)
- A hexagon ring built from nested groups of spheres and cylinders
- A capped cone and cylinder sharing a group material (inheritance)

The camera sits in front of the scene looking slightly down at the origin.

Example:
    >>> from src.whitted.scene.showcase import ShowcaseParams, create_showcase_scene
    >>> world, camera = create_showcase_scene()
    >>> len(world.objects)
    8

    >>> # Smaller, simpler scene
    >>> params = ShowcaseParams(include_die=False, include_hexagon=False)
    >>> world, camera = create_showcase_scene(params)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.whitted.camera.pinhole import Camera, view_transform
from src.whitted.core.matrix import compose, rotation_x, rotation_y, rotation_z, scaling, translation
from src.whitted.core.renderer import RenderSettings
from src.whitted.core.tuples import Color, Point, Vector
from src.whitted.geometry.cone import Cone
from src.whitted.geometry.csg import CSG, CsgOperation, csg_combine
from src.whitted.geometry.cube import Cube
from src.whitted.geometry.cylinder import Cylinder
from src.whitted.geometry.group import Group
from src.whitted.geometry.plane import Plane
from src.whitted.geometry.sphere import Sphere, glass_sphere
from src.whitted.materials.light import PointLight
from src.whitted.materials.material import Material, mirror
from src.whitted.materials.noise import PerlinNoise
from src.whitted.materials.patterns import CheckersPattern, PerturbedPattern, StripePattern
from src.whitted.scene.world import World

# =============================================================================
# Showcase Parameters
# =============================================================================


@dataclass
class ShowcaseParams:
    """Parameters for configuring the showcase scene.

    Attributes:
        light_position: World position of the point light.
        light_color: RGB intensity of the light.
        floor_colors: The two checker colors of the floor.
        wall_colors: The two stripe colors of the back wall.
        glass_index: Refractive index of the glass sphere.
        die_color: Body color of the CSG die.
        camera_from: Eye position.
        camera_to: Point the camera looks at.
        include_die: Add the CSG die.
        include_hexagon: Add the hexagon ring group.
        noise_seed: Seed for the wall perturbation noise.

    Example:
        >>> params = ShowcaseParams()
        >>> params.glass_index
        1.5
    """

    light_position: tuple[float, float, float] = (-4.0, 6.0, -6.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    floor_colors: tuple[tuple[float, float, float], tuple[float, float, float]] = (
        (0.35, 0.35, 0.35),
        (0.75, 0.75, 0.75),
    )
    wall_colors: tuple[tuple[float, float, float], tuple[float, float, float]] = (
        (0.55, 0.35, 0.25),
        (0.75, 0.6, 0.45),
    )
    glass_index: float = 1.5
    die_color: tuple[float, float, float] = (0.8, 0.1, 0.1)
    camera_from: tuple[float, float, float] = (0.0, 2.5, -7.5)
    camera_to: tuple[float, float, float] = (0.0, 0.8, 0.0)
    include_die: bool = True
    include_hexagon: bool = True
    noise_seed: int = 0


# =============================================================================
# Building Blocks
# =============================================================================


def create_hexagon(material: Material | None = None) -> Group:
    """A ring of six spheres joined by cylinders, one group per side.

    The ring lies in the xz plane with unit radius.
    """
    hexagon = Group(name="hexagon", material=material)
    for i in range(6):
        side = Group(transform=rotation_y(i * math.pi / 3.0), name=f"hexagon side {i}")
        corner = Sphere(transform=compose(scaling(0.25, 0.25, 0.25), translation(0, 0, -1)))
        edge = Cylinder(
            minimum=0.0,
            maximum=1.0,
            transform=compose(
                scaling(0.25, 1, 0.25),
                rotation_z(-math.pi / 2),
                rotation_y(-math.pi / 6),
                translation(0, 0, -1),
            ),
        )
        side.add(corner, edge)
        hexagon.add(side)
    return hexagon


# Pip centers on each face of a unit die, with the squash applied to each pip.
_PIP = 0.5
_PIP_SIZE = 0.15
_FACE_PIPS = {
    # face axis, sign, offsets within the face
    1: ("x", -1.0, [(0.0, 0.0)]),
    2: ("z", 1.0, [(-_PIP, _PIP), (_PIP, -_PIP)]),
    3: ("z", -1.0, [(-_PIP, _PIP), (0.0, 0.0), (_PIP, -_PIP)]),
    4: ("y", -1.0, [(-_PIP, -_PIP), (-_PIP, _PIP), (_PIP, -_PIP), (_PIP, _PIP)]),
    5: ("y", 1.0, [(-_PIP, -_PIP), (-_PIP, _PIP), (_PIP, -_PIP), (_PIP, _PIP), (0.0, 0.0)]),
    6: ("x", 1.0, [(-_PIP, -_PIP), (-_PIP, _PIP), (_PIP, -_PIP), (_PIP, _PIP), (-_PIP, 0.0), (_PIP, 0.0)]),
}


def _pip(axis: str, sign: float, a: float, b: float, material: Material) -> Sphere:
    half = _PIP_SIZE / 2.0
    if axis == "x":
        squash, position = scaling(half, _PIP_SIZE, _PIP_SIZE), translation(sign, a, b)
    elif axis == "y":
        squash, position = scaling(_PIP_SIZE, half, _PIP_SIZE), translation(a, sign, b)
    else:
        squash, position = scaling(_PIP_SIZE, _PIP_SIZE, half), translation(a, b, sign)
    return Sphere(transform=compose(squash, position), material=material)


def create_die(transform=None, material: Material | None = None, pip_material: Material | None = None) -> CSG:
    """A rounded die with carved pips.

    The body is a cube intersected with a slightly larger sphere, which
    rounds off the edges and corners. The pips are flattened spheres
    subtracted from the body.
    """
    material = material if material is not None else Material()
    pip_material = pip_material if pip_material is not None else Material(color=Color(1, 1, 1), ambient=0.3)
    body = CSG(
        CsgOperation.INTERSECT,
        Cube(material=material),
        Sphere(transform=scaling(1.5, 1.5, 1.5), material=material),
    )
    pips = [
        _pip(axis, sign, a, b, pip_material)
        for axis, sign, offsets in _FACE_PIPS.values()
        for a, b in offsets
    ]
    return CSG(
        CsgOperation.DIFFERENCE,
        body,
        csg_combine(CsgOperation.UNION, *pips),
        transform=transform,
        name="die",
    )


# =============================================================================
# Showcase Factory
# =============================================================================


def create_showcase_scene(
    params: ShowcaseParams | None = None,
    settings: RenderSettings | None = None,
) -> tuple[World, Camera]:
    """Create the showcase world and a camera looking at it.

    Args:
        params: Scene parameters. Default is ShowcaseParams().
        settings: Image size and field of view for the camera. Default is
            RenderSettings().

    Returns:
        A tuple of (World, Camera).
    """
    if params is None:
        params = ShowcaseParams()
    if settings is None:
        settings = RenderSettings()

    # =========================================================================
    # Room
    # =========================================================================

    floor_a, floor_b = (Color(*c) for c in params.floor_colors)
    floor = Plane(
        material=Material(pattern=CheckersPattern(floor_a, floor_b), specular=0.0, reflective=0.1),
        name="floor",
    )

    wall_a, wall_b = (Color(*c) for c in params.wall_colors)
    stripes = StripePattern(wall_a, wall_b, transform=compose(scaling(0.5, 1, 1), rotation_y(math.pi / 4)))
    wall = Plane(
        transform=compose(rotation_x(math.pi / 2), translation(0, 0, 8)),
        material=Material(pattern=PerturbedPattern(stripes, noise=PerlinNoise(params.noise_seed)), specular=0.0),
        name="back wall",
    )

    # =========================================================================
    # Spheres
    # =========================================================================

    glass = glass_sphere(
        translation(-1.2, 1, 0.5),
        color=Color(0.1, 0.1, 0.1),
        ambient=0.0,
        diffuse=0.1,
        specular=1.0,
        shininess=300.0,
        reflective=0.9,
        refractive_index=params.glass_index,
    )
    glass.name = "glass sphere"
    bubble = Sphere(
        transform=compose(scaling(0.4, 0.4, 0.4), translation(-1.2, 1, 0.5)),
        material=Material(
            color=Color(1, 1, 1), ambient=0.0, diffuse=0.0, transparency=1.0, reflective=0.9, refractive_index=1.0
        ),
        name="air bubble",
    )

    chrome = Sphere(
        transform=compose(scaling(0.7, 0.7, 0.7), translation(1.4, 0.7, 1.5)),
        material=mirror(color=Color(0.1, 0.1, 0.12)),
        name="mirror sphere",
    )

    # =========================================================================
    # Cylinder and cone sharing a group material
    # =========================================================================

    lamp = Group(
        transform=translation(2.6, 0, -0.8),
        material=Material(color=Color(0.2, 0.45, 0.8), specular=0.6, shininess=50.0),
        name="lamp",
    )
    lamp.add(
        Cylinder(minimum=0.0, maximum=0.8, closed=True, transform=scaling(0.15, 1, 0.15)),
        Cone(minimum=-1.0, maximum=0.0, closed=True, transform=compose(scaling(0.5, 0.5, 0.5), translation(0, 1.3, 0))),
    )

    world = World(
        [floor, wall, glass, bubble, chrome, lamp],
        PointLight(Point(*params.light_position), Color(*params.light_color)),
    )

    if params.include_die:
        world.add(
            create_die(
                transform=compose(
                    scaling(0.45, 0.45, 0.45),
                    rotation_y(math.pi / 5),
                    translation(0.2, 0.45, -1.8),
                ),
                material=Material(color=Color(*params.die_color), reflective=0.05),
            )
        )
    if params.include_hexagon:
        world.add(
            Group(
                [create_hexagon(Material(color=Color(0.9, 0.75, 0.2), reflective=0.2))],
                transform=compose(scaling(0.6, 0.6, 0.6), rotation_x(-math.pi / 6), translation(-2.4, 0.5, -1.5)),
                name="hexagon holder",
            )
        )

    # =========================================================================
    # Camera
    # =========================================================================

    camera = Camera(
        settings.width,
        settings.height,
        settings.field_of_view,
        view_transform(Point(*params.camera_from), Point(*params.camera_to), Vector(0, 1, 0)),
    )
    return world, camera
