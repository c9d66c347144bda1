"""Background image helpers.

Images chosen in the settings panel are read fully into memory and kept
as ``data:`` URIs so they can live in the preference store.
"""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path


IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp *.svg)"

_DATA_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


def encode_data_uri(path: Path | str) -> str:
    """Read *path* and return it as a base64 ``data:`` URI."""
    path = Path(path)
    mime, _ = mimetypes.guess_type(path.name)
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"{_DATA_PREFIX}{mime or 'application/octet-stream'}{_BASE64_MARKER}{payload}"


def decode_data_uri(uri: str) -> bytes | None:
    """Raw bytes from a base64 ``data:`` URI, or ``None`` if malformed."""
    if not uri.startswith(_DATA_PREFIX) or _BASE64_MARKER not in uri:
        return None
    _, payload = uri.split(_BASE64_MARKER, 1)
    try:
        return base64.b64decode(payload, validate=True)
    except ValueError:
        return None
