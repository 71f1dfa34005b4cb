"""
Cover Image Codec

A project can carry one cover image, stored as encoded bytes inside
the project record. Whatever the user picks (PNG, HEIC converted by
the picker, WebP, ...) is re-encoded as JPEG at a fixed quality so the
stored payload stays small and uniform.

DESIGN DECISION: Image decoding uses PIL. We never trust raw bytes
from a picker; anything PIL cannot open is rejected before it reaches
a project.
"""

from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from cosplay_planner.config import ImageSettings, get_settings


class CoverImageError(Exception):
    """The payload is not a usable image."""
    pass


class CoverImageCodec:
    """Encodes picked images for storage and decodes stored ones."""

    def __init__(self, settings: Optional[ImageSettings] = None):
        self._settings = settings or get_settings().image

    def encode(self, raw: bytes) -> bytes:
        """
        Re-encode picked image bytes as JPEG.

        Raises:
            CoverImageError: If the bytes are too large or not an image
        """
        if len(raw) > self._settings.max_upload_size_bytes:
            raise CoverImageError(
                f"Image is larger than {self._settings.max_upload_size_mb} MB"
            )

        img = self._open(raw)
        # JPEG has no alpha channel
        if img.mode != "RGB":
            img = img.convert("RGB")

        buffer = BytesIO()
        img.save(buffer, format="JPEG", quality=self._settings.jpeg_quality)
        return buffer.getvalue()

    def decode(self, data: Optional[bytes]) -> Optional[Image.Image]:
        """Stored bytes as a PIL image, or None when missing or unreadable."""
        if not data:
            return None
        try:
            return self._open(data)
        except CoverImageError:
            return None

    def describe_problem(self, raw: bytes) -> Optional[str]:
        """Why these bytes cannot be used as a cover image, or None if they can."""
        if len(raw) > self._settings.max_upload_size_bytes:
            return f"Image is larger than {self._settings.max_upload_size_mb} MB"
        try:
            self._open(raw)
        except CoverImageError as e:
            return str(e)
        return None

    def _open(self, data: bytes) -> Image.Image:
        try:
            img = Image.open(BytesIO(data))
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise CoverImageError(f"Could not read image: {e}") from e
        return img
