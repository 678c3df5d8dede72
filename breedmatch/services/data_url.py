"""
Decoding for the ``data:`` URLs the browser sends uploaded photos as.
"""
import base64
import binascii
import re
from dataclasses import dataclass

DEFAULT_MEDIA_TYPE = "image/jpeg"

_MEDIA_TYPE = re.compile(r"data:(.*?);")


class InvalidDataURL(ValueError):
    """The uploaded image could not be decoded."""


@dataclass(frozen=True)
class DecodedImage:
    media_type: str
    data: bytes

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.media_type};base64,{encoded}"


def parse_data_url(value: str) -> DecodedImage:
    """
    Split ``data:image/png;base64,....`` into its media type and bytes.

    A bare base64 string (no header) is accepted as a JPEG.
    """
    if "," in value:
        header, payload = value.split(",", 1)
    else:
        header, payload = "", value

    match = _MEDIA_TYPE.search(header)
    media_type = match.group(1) if match and match.group(1) else DEFAULT_MEDIA_TYPE

    payload = payload.strip()
    if not payload:
        raise InvalidDataURL("Image data is empty")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidDataURL(f"Image data is not valid base64: {e}") from e

    return DecodedImage(media_type=media_type, data=data)
