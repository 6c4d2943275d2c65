"""
Helpers for reading and updating a Connection from steps and actions.
"""

import json as jsonlib
from http import HTTPStatus
from typing import Any, Optional, Union

from markupsafe import escape

from .models import Connection

DEFAULT_LAYOUT = "application"


def assign(conn: Connection, key: str, value: Any) -> Connection:
    """Store a value for the views to read."""
    conn.assigns[key] = value
    return conn


def put_status(conn: Connection, status: int) -> Connection:
    conn.status = int(status)
    return conn


def put_resp_content_type(conn: Connection, content_type: str) -> Connection:
    conn.resp_content_type = content_type
    return conn


def put_resp_header(conn: Connection, name: str, value: str) -> Connection:
    conn.resp_headers[name] = value
    return conn


def halt(conn: Connection) -> Connection:
    """Mark the connection so no further pipeline steps run."""
    conn.halted = True
    return conn


def action_name(conn: Connection) -> Optional[str]:
    return conn.private.action


def controller_module(conn: Connection) -> Optional[type]:
    return conn.private.controller


def layout(conn: Connection) -> Union[str, bool]:
    """Return the layout template name, or False when layouts are disabled."""
    if conn.private.layout is None:
        return DEFAULT_LAYOUT
    return conn.private.layout


def put_layout(conn: Connection, name: Union[str, bool]) -> Connection:
    """Choose the layout template for this connection.

    Pass False to render without a layout.
    """
    if name is True:
        name = DEFAULT_LAYOUT
    conn.private.layout = name
    return conn


def send_response(conn: Connection, status: int, content_type: str, body: Union[str, bytes]) -> Connection:
    """Finalize the response with status, Content-Type and body."""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    conn.status = int(status)
    conn.resp_content_type = content_type
    conn.resp_headers["Content-Type"] = content_type
    conn.resp_headers["Content-Length"] = str(len(body.encode("utf-8")))
    conn.resp_body = str(body)
    return conn


def text(conn: Connection, status: int, body: str) -> Connection:
    return send_response(conn, status, "text/plain", body)


def html(conn: Connection, status: int, body: str) -> Connection:
    return send_response(conn, status, "text/html", body)


def json(conn: Connection, status: int, data: Any) -> Connection:
    return send_response(conn, status, "application/json", jsonlib.dumps(data))


def redirect(conn: Connection, to: str, status: int = HTTPStatus.FOUND) -> Connection:
    """Redirect the client and halt the pipeline."""
    put_resp_header(conn, "Location", to)
    html(conn, status, f'<html><body>You are being <a href="{escape(to)}">redirected</a>.</body></html>')
    return halt(conn)
