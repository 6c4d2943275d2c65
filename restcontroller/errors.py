"""
Not-found and error responses.
"""

import logging
import traceback
from http import HTTPStatus
from typing import Optional

from markupsafe import escape

from .config import Config
from .connection import html, text
from .exceptions import status_for
from .models import Connection

logger = logging.getLogger(__name__)

ERROR_PAGE = """<html>
  <body>
    <pre>Something went wrong</pre>
  </body>
</html>
"""

TRACE_PAGE = """<html>
  <h2>({exception_type}) {message}</h2>
  <h4>Stacktrace</h4>
  <body>
    <pre>{stacktrace}</pre>
  </body>
</html>
"""


def not_found(conn: Connection, method: str, path: str) -> Connection:
    """Send a plain text 404 naming the unmatched method and path."""
    logger.info(f"No route matches {method} {path}")
    return text(conn, HTTPStatus.NOT_FOUND, f"No route matches {method} to {path!r}")


def error(conn: Connection, exc: BaseException) -> Connection:
    """Send the generic HTML error page at the exception's status."""
    return html(conn, status_for(exc), ERROR_PAGE)


def error_with_trace(conn: Connection, exc: BaseException, config: Optional[Config] = None) -> Connection:
    """
    Send an HTML error page with the exception type, message and stack trace.

    For use in development only. Unless ``config.traces_enabled`` (a
    development config with debug_errors on), this renders the generic page
    from ``error`` instead.
    """
    if config is None:
        try:
            config = Config.from_env()
        except ValueError as e:
            logger.warning(f"Ignoring invalid environment configuration while rendering an error: {e}")
            config = Config()
    if not config.traces_enabled:
        logger.warning(f"Refusing to render a stack trace in {config.environment}")
        return error(conn, exc)

    exception_type = f"{type(exc).__module__}.{type(exc).__qualname__}"
    if type(exc).__module__ == "builtins":
        exception_type = type(exc).__qualname__
    stacktrace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    body = TRACE_PAGE.format(
        exception_type=escape(exception_type),
        message=escape(str(exc)),
        stacktrace=escape(stacktrace),
    )
    return html(conn, status_for(exc), body)
