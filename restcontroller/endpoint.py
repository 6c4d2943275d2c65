"""
The boundary between the transport and the controllers.

The endpoint asks the router for a match, dispatches it, and turns anything
raised on the way into an error response so one bad request never takes the
process down.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import Config
from .controller import perform_action
from .errors import error, error_with_trace, not_found
from .exceptions import status_for
from .models import Connection, Headers

logger = logging.getLogger(__name__)


@dataclass
class RouteMatch:
    """What a router hands back for a matched request."""

    controller: type
    action: str
    named_params: Dict[str, Any] = field(default_factory=dict)


Router = Callable[[str, str], Optional[RouteMatch]]


class Endpoint:
    """Dispatches connections to controllers using a router callable.

    Args:
        router: Called with (method, path); returns a RouteMatch or None.
        config: Runtime configuration. Defaults to Config.from_env().

    Example::

        def router(method, path):
            if method == "GET" and path.startswith("/users/"):
                return RouteMatch(UserController, "show", {"id": path.rsplit("/", 1)[1]})
            return None

        endpoint = Endpoint(router, Config(environment="development"))
        conn = endpoint.call(Connection("GET", "/users/1"))
    """

    def __init__(self, router: Router, config: Optional[Config] = None):
        self.router = router
        self.config = config or Config.from_env()

    def call(self, conn: Connection) -> Connection:
        match = self.router(conn.method, conn.path)
        if match is None:
            return not_found(conn, conn.method, conn.path)

        if conn.private.layout is None:
            conn.private.layout = self.config.default_layout

        try:
            return perform_action(conn, match.controller, match.action, match.named_params)
        except Exception as e:
            if status_for(e) >= 500:
                logger.error(f"Unhandled exception processing {conn.method} {conn.path}: {e}", exc_info=True)
            else:
                logger.warning(f"{conn.method} {conn.path} ended with {status_for(e)}: {e}")
            # Drop headers written before the failure, e.g. a Location
            conn.resp_headers = Headers()
            if self.config.traces_enabled:
                return error_with_trace(conn, e, self.config)
            return error(conn, e)

    __call__ = call
