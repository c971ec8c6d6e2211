"""Camera models with ray generation."""

from .pinhole import Camera, view_transform

__all__ = ["Camera", "view_transform"]
