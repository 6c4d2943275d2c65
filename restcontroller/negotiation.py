"""
Content negotiation for rendering: from the response content type to the
template extensions to try.

The content type is whatever an earlier step or the action decided. Matching
against the client's Accept list happens upstream, in ContentTypeFetcher.
"""

from typing import List

from . import mime
from .models import Connection

DEFAULT_CONTENT_TYPE = "text/html"


def response_content_type(conn: Connection) -> str:
    """Get the response content type, defaulting to text/html."""
    return conn.resp_content_type or DEFAULT_CONTENT_TYPE


def extensions_for(content_type: str) -> List[str]:
    """Ordered template extensions for a content type (may be empty)."""
    return mime.extensions(content_type)
