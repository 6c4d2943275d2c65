"""
Controller dispatch and view rendering for a router-fronted web application.

This module provides controllers with declarative plug pipelines, an action
dispatcher, content-type driven template selection, naming-convention view
and layout resolution backed by Jinja2, and development-friendly error pages.
"""

from http import HTTPStatus

from .config import Config
from .connection import (
    action_name,
    assign,
    controller_module,
    halt,
    html,
    json,
    layout,
    put_layout,
    put_resp_content_type,
    put_resp_header,
    put_status,
    redirect,
    send_response,
    text,
)
from .controller import Controller, action, dispatch, perform_action
from .endpoint import Endpoint, RouteMatch
from .errors import error, error_with_trace, not_found
from .exceptions import (
    HTTPError,
    InvalidStepResultError,
    NotFoundError,
    PipelineConfigurationError,
    RenderError,
    RestControllerError,
    TemplateNotFoundError,
    UndefinedActionError,
    UnsafeRenderResultError,
    ViewNotFoundError,
    status_for,
)
from .models import Connection, ControllerPrivate, Headers
from .naming import layout_module_name, view_module_name
from .negotiation import DEFAULT_CONTENT_TYPE, extensions_for, response_content_type
from .pipeline import ACTION, Pipeline, Plug, Step, build_steps, halted, plug, plugged
from .plugs import ContentTypeFetcher, ParamsFetcher
from .rendering import render_view, template_name
from .views import TemplateView, View, ViewRegistry, registry, safe

__version__ = "0.1.0"
__author__ = "restcontroller Contributors"
__license__ = "MIT"

__all__ = [
    "ACTION",
    "Config",
    "Connection",
    "ContentTypeFetcher",
    "Controller",
    "ControllerPrivate",
    "DEFAULT_CONTENT_TYPE",
    "Endpoint",
    "HTTPError",
    "HTTPStatus",
    "Headers",
    "InvalidStepResultError",
    "NotFoundError",
    "ParamsFetcher",
    "Pipeline",
    "PipelineConfigurationError",
    "Plug",
    "RenderError",
    "RestControllerError",
    "RouteMatch",
    "Step",
    "TemplateNotFoundError",
    "TemplateView",
    "UndefinedActionError",
    "UnsafeRenderResultError",
    "View",
    "ViewNotFoundError",
    "ViewRegistry",
    "action",
    "action_name",
    "assign",
    "build_steps",
    "controller_module",
    "dispatch",
    "error",
    "error_with_trace",
    "extensions_for",
    "halt",
    "halted",
    "html",
    "json",
    "layout",
    "layout_module_name",
    "not_found",
    "perform_action",
    "plug",
    "plugged",
    "put_layout",
    "put_resp_content_type",
    "put_resp_header",
    "put_status",
    "redirect",
    "registry",
    "render_view",
    "response_content_type",
    "safe",
    "send_response",
    "status_for",
    "template_name",
    "text",
    "view_module_name",
]
