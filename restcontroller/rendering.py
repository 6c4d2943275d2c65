"""
Render orchestration: pick the template, attach the layout, call the view and
finalize the response.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from markupsafe import Markup

from .connection import action_name, layout, send_response
from .exceptions import RenderError, UnsafeRenderResultError, ViewNotFoundError
from .models import Connection
from .negotiation import extensions_for, response_content_type
from .views import View, ViewRegistry
from .views import registry as default_registry

logger = logging.getLogger(__name__)

ViewRef = Union[View, str]


def template_name(template: str, extensions: List[str]) -> str:
    """Add the first negotiated extension to a template name.

    Examples:
        template_name("show", [])               -> "show"
        template_name("show", ["html", "htm"])  -> "show.html"
    """
    if not extensions:
        return template
    return f"{template}.{extensions[0]}"


def render_view(
    conn: Connection,
    view: ViewRef,
    layout_view: ViewRef,
    template: Optional[str] = None,
    assigns: Optional[Mapping[str, Any]] = None,
    registry: Optional[ViewRegistry] = None,
) -> Connection:
    """
    Render a view template chosen by the response content type.

    Args:
        conn: The connection being rendered.
        view: The view (or its registered name) to call ``render`` on.
        layout_view: The layout view (or its name); only resolved when the
                     connection has a layout enabled.
        template: Template name such as "show" or "index". None renders the
                  template named after the current action.
        assigns: Extra assigns for the template; they win over conn.assigns.
        registry: Where view names are looked up. Defaults to the shared
                  registry.

    Returns:
        The connection with status, Content-Type and body set.

    Raises:
        ViewNotFoundError: If the view or enabled layout cannot be resolved.
        UnsafeRenderResultError: If the view returns anything but Markup.

    Examples:
        # In an action, with the convention-derived views
        return self.render(conn, "show", name="José")

        # Directly
        render_view(conn, "MyApp.UserView", "MyApp.LayoutView", "show", {"name": "José"})
    """
    if registry is None:
        registry = default_registry

    if template is None:
        template = action_name(conn)
        if template is None:
            raise RenderError("No template given and no action recorded on the connection")
    merged = {**conn.assigns, **(assigns or {})}
    content_type = response_content_type(conn)
    extensions = extensions_for(content_type)
    status = conn.status or 200

    layout_template = layout(conn)
    if layout_template:
        if "within" not in merged:
            merged["within"] = (_resolve(layout_view, registry), template_name(layout_template, extensions))

    view = _resolve(view, registry)
    identifier = template_name(template, extensions)
    logger.debug(f"Rendering {_view_label(view)}:{identifier} as {content_type}")

    rendered = view.render(identifier, merged)
    if not isinstance(rendered, Markup):
        raise UnsafeRenderResultError(_view_label(view), identifier, rendered)

    return send_response(conn, status, content_type, str(rendered))


def _resolve(view: ViewRef, registry: ViewRegistry) -> View:
    if isinstance(view, str):
        return registry.resolve(view)
    if not callable(getattr(view, "render", None)):
        raise ViewNotFoundError(repr(view), "object has no render()")
    return view


def _view_label(view: View) -> str:
    return getattr(view, "name", view.__class__.__name__)
