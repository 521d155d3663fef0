import base64
import binascii
import io
import logging
from dataclasses import dataclass
from typing import Union

from PIL import Image, UnidentifiedImageError

from plant_detector.config import MAX_IMAGE_DIMENSION

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

# PIL format name -> mime type sent to the model
_FORMAT_MIME = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "WEBP": "image/webp",
    "GIF": "image/gif",
}


class InvalidImageError(ValueError):
    """Upload could not be decoded as an image."""


@dataclass(frozen=True)
class PreparedImage:
    mime_type: str
    data: str  # base64, no data URL prefix

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def strip_data_url(image: str) -> str:
    """Remove a ``data:<mime>;base64,`` prefix if present."""
    if image.startswith("data:") and "," in image:
        return image.split(",", 1)[1]
    return image


def _mime_from_data_url(image: str) -> str:
    header = image.split(",", 1)[0]  # data:image/png;base64
    mime = header[5:].split(";", 1)[0]
    return mime or DEFAULT_MIME_TYPE


def decode_image(image: Union[str, bytes]) -> bytes:
    """Return raw image bytes from bytes, a base64 string or a data URL."""
    if isinstance(image, bytes):
        if not image:
            raise InvalidImageError("Empty image")
        return image

    raw = strip_data_url(image.strip())
    if not raw:
        raise InvalidImageError("Empty image")
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError(f"Image is not valid base64: {e}") from e


def prepare_image(image: Union[str, bytes], max_dimension: int = MAX_IMAGE_DIMENSION) -> PreparedImage:
    """Decode, sniff the format and downsize an image for upload.

    Falls back to sending the bytes untouched (as JPEG, like the camera
    produces) when PIL cannot read them; the model decides what it sees.
    """
    image_bytes = decode_image(image)
    declared_mime = (
        _mime_from_data_url(image) if isinstance(image, str) and image.startswith("data:") else None
    )

    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            mime_type = _FORMAT_MIME.get(img.format or "", declared_mime or DEFAULT_MIME_TYPE)
            if max(img.size) > max_dimension:
                original_size = img.size
                resized = img.convert("RGB")
                resized.thumbnail((max_dimension, max_dimension))
                buffer = io.BytesIO()
                resized.save(buffer, format="JPEG", quality=85)
                image_bytes = buffer.getvalue()
                mime_type = "image/jpeg"
                logger.info(f"Downsized image {original_size} -> {resized.size}")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        logger.warning(f"Could not inspect image, sending as-is: {e}")
        mime_type = declared_mime or DEFAULT_MIME_TYPE

    return PreparedImage(mime_type=mime_type, data=base64.b64encode(image_bytes).decode("utf-8"))


def to_data_url(image: Union[str, bytes]) -> str:
    """Normalise an upload to a data URL usable as ``imageUrl`` in history."""
    if isinstance(image, str) and (image.startswith("data:") or image.startswith("http")):
        return image
    prepared = prepare_image(image)
    return prepared.data_url
