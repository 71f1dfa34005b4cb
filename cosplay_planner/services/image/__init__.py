"""Cover image service package."""

from cosplay_planner.services.image.cover_image import CoverImageCodec, CoverImageError

__all__ = [
    "CoverImageCodec",
    "CoverImageError",
]
