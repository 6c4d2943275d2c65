"""
MIME type to file extension table used for template selection.
"""

import mimetypes
from typing import Dict, List, Optional, Tuple

# Preferred extensions, first entry wins; anything else falls back to mimetypes
_EXTENSIONS: Dict[str, Tuple[str, ...]] = {
    "text/html": ("html", "htm"),
    "text/plain": ("txt", "text"),
    "text/css": ("css",),
    "text/csv": ("csv",),
    "text/markdown": ("md", "markdown"),
    "text/xml": ("xml",),
    "application/json": ("json",),
    "application/xml": ("xml",),
    "application/javascript": ("js",),
    "application/atom+xml": ("atom",),
    "application/rss+xml": ("rss",),
    "application/xhtml+xml": ("xhtml",),
}


def base_type(content_type: str) -> str:
    """Strip parameters such as charset from a content type."""
    return content_type.split(";")[0].strip().lower()


def extensions(content_type: str) -> List[str]:
    """Return the known extensions for a content type, without dots.

    An empty list means the type has no registered extension.
    """
    media_type = base_type(content_type)
    if media_type in _EXTENSIONS:
        return list(_EXTENSIONS[media_type])
    return [ext.lstrip(".") for ext in mimetypes.guess_all_extensions(media_type, strict=False)]


def mime_type(extension: str) -> Optional[str]:
    """Return the content type for an extension such as "json" or ".html"."""
    extension = extension.lstrip(".").lower()
    for media_type, known in _EXTENSIONS.items():
        if extension in known:
            return media_type
    guessed, _ = mimetypes.guess_type(f"file.{extension}", strict=False)
    return guessed


def is_known(content_type: str) -> bool:
    return bool(extensions(content_type))
