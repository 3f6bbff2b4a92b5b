"""Upload file naming.

Stored names are generated server-side; the client's file name only
contributes its extension.

Format: {uuid4 hex}{.ext}

Examples:
    >>> from blogapi.storage.naming import extract_extension, generate_upload_name
    >>> extract_extension("photo.png")
    '.png'
    >>> generate_upload_name("photo.png")
    '3f2b1a...e9.png'
"""

from __future__ import annotations

import re
import uuid

_SAFE_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,16}$")


def extract_extension(filename: str) -> str:
    """Return the text after the last dot, with the dot, or '' if none.

    Path components are discarded first, and a leading dot on its own
    (``.bashrc``) is not treated as an extension. Extensions with
    characters outside ``[A-Za-z0-9]`` are dropped.
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    index = name.rfind(".")
    if index <= 0:
        return ""
    extension = name[index:]
    if not _SAFE_EXTENSION.match(extension):
        return ""
    return extension


def generate_upload_name(filename: str, uuid_str: str | None = None) -> str:
    """Generate a collision-proof stored name for an upload.

    Args:
        filename: Original client file name.
        uuid_str: Override the random identifier (tests).

    Returns:
        Stored file name.
    """
    if uuid_str is None:
        uuid_str = uuid.uuid4().hex
    return f"{uuid_str}{extract_extension(filename)}"


def is_safe_name(name: str) -> bool:
    """True if the name cannot escape the upload directory."""
    return bool(name) and ".." not in name and "/" not in name and "\\" not in name
