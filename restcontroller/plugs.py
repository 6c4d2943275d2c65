"""
Baseline pipeline steps prepended to every non-bare controller.
"""

import logging
from typing import Any, Dict

from . import mime
from .models import Connection
from .pipeline import Plug, Step

logger = logging.getLogger(__name__)


class ParamsFetcher(Plug):
    """Merge query, body and named route parameters into ``conn.params``.

    Precedence, lowest to highest: query string, body, route. Values already
    in ``conn.params`` are kept unless a source overrides them.
    """

    def call(self, conn: Connection, options: Dict[str, Any]) -> Connection:
        params: Dict[str, Any] = dict(conn.params)
        params.update(conn.query_params)
        params.update(conn.body_params)
        params.update(conn.private.named_params)
        conn.params = params
        return conn


class ContentTypeFetcher(Plug):
    """Guess the response content type before the action runs.

    A ``format`` parameter (``?format=json``) wins; otherwise the first
    type in the client's Accept list that has a template extension is used.
    Wildcards are skipped, and a type set by an earlier step is left alone.
    """

    def call(self, conn: Connection, options: Dict[str, Any]) -> Connection:
        if conn.resp_content_type:
            return conn

        content_type = None
        format_param = conn.params.get("format") or conn.query_params.get("format")
        if format_param:
            content_type = mime.mime_type(str(format_param))
            if content_type is None:
                logger.debug(f"Unknown format {format_param!r}, ignoring")

        if content_type is None:
            for media_type in conn.accept or []:
                if "*" in media_type:
                    continue
                if mime.is_known(media_type):
                    content_type = media_type
                    break

        if content_type:
            logger.debug(f"Response content type: {content_type}")
            conn.resp_content_type = content_type
        return conn


BASELINE_STEPS = (Step(ParamsFetcher), Step(ContentTypeFetcher))
