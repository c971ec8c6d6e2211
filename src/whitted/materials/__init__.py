"""Surface appearance: materials, lights, Phong lighting and patterns."""

from .light import PointLight
from .material import DEFAULT_MATERIAL, Material, glass, mirror
from .noise import PerlinNoise
from .patterns import (
    BlendedPattern,
    CheckersPattern,
    GradientPattern,
    Pattern,
    PerturbedPattern,
    RadialGradientPattern,
    RingPattern,
    SolidPattern,
    StripePattern,
)
from .phong import lighting, schlick

__all__ = [
    "Material",
    "DEFAULT_MATERIAL",
    "glass",
    "mirror",
    "PointLight",
    "lighting",
    "schlick",
    "PerlinNoise",
    "Pattern",
    "SolidPattern",
    "StripePattern",
    "RingPattern",
    "CheckersPattern",
    "GradientPattern",
    "RadialGradientPattern",
    "BlendedPattern",
    "PerturbedPattern",
]
