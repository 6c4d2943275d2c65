"""
Custom exceptions for the controller layer.
"""
from http import HTTPStatus
from typing import Optional


class RestControllerError(Exception):
    """Base exception for controller dispatch and rendering errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR


class PipelineConfigurationError(RestControllerError):
    """Raised when a controller's plug pipeline is declared incorrectly."""

    pass


class UndefinedActionError(RestControllerError):
    """Raised when the requested action is not defined on the controller."""

    def __init__(self, controller: str, action: str):
        self.controller = controller
        self.action = action
        super().__init__(f"{controller} does not define action {action!r}")


class InvalidStepResultError(RestControllerError):
    """Raised when a pipeline step does not return a connection."""

    def __init__(self, step: str, result):
        self.step = step
        self.result = result
        super().__init__(
            f"Expected step {step!r} to return a Connection, got {type(result).__name__}"
        )


class RenderError(RestControllerError):
    """Base class for view resolution and rendering failures."""

    pass


class ViewNotFoundError(RenderError):
    """Raised when a view or layout cannot be resolved by name."""

    def __init__(self, name: str, reason: Optional[str] = None):
        self.name = name
        message = f"Could not resolve view {name!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TemplateNotFoundError(RenderError):
    """Raised when a view has no template with the requested name."""

    def __init__(self, template: str, source: Optional[str] = None):
        self.template = template
        self.source = source
        message = f"Template {template!r} not found"
        if source:
            message = f"{message} in {source}"
        super().__init__(message)


class UnsafeRenderResultError(RenderError):
    """Raised when a view returns output that is not marked safe."""

    def __init__(self, view: str, template: str, result):
        self.view = view
        self.template = template
        self.result = result
        super().__init__(
            f"{view}.render({template!r}) returned {type(result).__name__}, "
            f"expected markupsafe.Markup"
        )


class HTTPError(RestControllerError):
    """Raised by actions to end the request with a specific status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        if message is None:
            try:
                message = HTTPStatus(status_code).phrase
            except ValueError:
                message = "Error"
        self.message = message
        super().__init__(message)


class NotFoundError(HTTPError):
    """Raised when the resource an action looks for does not exist."""

    def __init__(self, message: str = "Not Found"):
        super().__init__(HTTPStatus.NOT_FOUND, message)


def status_for(error: BaseException) -> int:
    """Map an exception to an HTTP status code.

    Looks for a ``status_code`` attribute first, then ``plug_status``, and
    falls back to 500 for anything else.
    """
    for attribute in ("status_code", "plug_status"):
        status = getattr(error, attribute, None)
        if isinstance(status, int):
            return int(status)
    return HTTPStatus.INTERNAL_SERVER_ERROR
