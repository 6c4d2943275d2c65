"""
Controllers handle the dispatch of router matches.

A controller is a class whose ``@action`` methods answer requests. In front of
every action runs the controller's plug pipeline: the baseline parameter and
content-type fetchers, the steps listed in ``plugs``, and the required
``ACTION`` step that calls the action. ``ACTION`` is appended to the end unless
it is listed explicitly to change its position.

Example::

    class UserController(Controller, name="MyApp.UserController"):
        plugs = [plug("authenticate", usernames=["jose", "eric", "sonny"])]

        def authenticate(self, conn, options):
            if conn.assigns.get("username") in options["usernames"]:
                return conn
            return redirect(conn, "/")

        @action
        def show(self, conn, params):
            # authenticated users only
            return self.render(conn, "show", name="José")
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from .exceptions import UndefinedActionError
from .models import Connection
from .naming import layout_module_name, qualified_name, view_module_name
from .pipeline import Pipeline, Step, build_steps, compile_steps
from .rendering import render_view
from .views import ViewRegistry
from .views import registry as default_registry

logger = logging.getLogger(__name__)

ActionFunc = Callable[[Any, Connection, Dict[str, Any]], Connection]


def action(func: ActionFunc) -> ActionFunc:
    """Mark a controller method as an action the router may dispatch to."""
    func.__controller_action__ = True  # type: ignore[attr-defined]
    return func


class Controller:
    """Base class for controllers.

    Class keyword arguments:
        bare: Skip the baseline ParamsFetcher/ContentTypeFetcher steps.
        name: Dotted name used to derive the view and layout names.
              Defaults to ``module.QualName``.
    """

    plugs: Sequence[Step] = ()
    views: ViewRegistry = default_registry

    controller_name: Optional[str] = None
    view_name: Optional[str] = None
    layout_name: Optional[str] = None

    _actions: Mapping[str, ActionFunc] = MappingProxyType({})
    _steps: Tuple[Step, ...] = ()
    _pipeline: Optional[Pipeline] = None

    def __init_subclass__(cls, bare: bool = False, name: Optional[str] = None, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.controller_name = name or f"{cls.__module__}.{cls.__qualname__}"
        cls.view_name = view_module_name(cls)
        cls.layout_name = layout_module_name(cls)

        actions = dict(cls._actions)
        for attr, value in cls.__dict__.items():
            if getattr(value, "__controller_action__", False):
                actions[attr] = value
            elif attr in actions:
                # Redefining an inherited action overrides it; a non-callable removes it
                if callable(value):
                    actions[attr] = value
                else:
                    del actions[attr]
        cls._actions = MappingProxyType(actions)

        cls._steps = build_steps(cls.plugs, bare=bare)
        cls._pipeline = compile_steps(cls._steps, cls)
        logger.debug(f"Built {cls.controller_name}: {cls._pipeline.labels}")

    @classmethod
    def call(cls, conn: Connection) -> Connection:
        """Run the plug pipeline for one request."""
        if cls._pipeline is None:
            raise TypeError("Controller must be subclassed before it can be called")
        return cls._pipeline(conn, owner=cls())

    @classmethod
    def action_names(cls):
        return sorted(cls._actions)

    @classmethod
    def step_labels(cls):
        return cls._pipeline.labels if cls._pipeline is not None else []

    def dispatch_action(self, conn: Connection, options: Dict[str, Any]) -> Connection:
        """The ACTION step: call the action recorded on the connection."""
        name = conn.private.action
        func = self._actions.get(name) if name is not None else None
        if func is None:
            raise UndefinedActionError(qualified_name(type(self)), str(name))
        logger.debug(f"Dispatching {self.controller_name}.{name}")
        return func(self, conn, conn.params)

    def render(self, conn: Connection, template: Optional[str] = None, **assigns: Any) -> Connection:
        """Render ``template`` (default: the action name) with this controller's views."""
        return render_view(conn, self.view_name, self.layout_name, template, assigns, registry=self.views)


def perform_action(
    conn: Connection,
    controller: type,
    action: str,
    named_params: Optional[Mapping[str, Any]] = None,
) -> Connection:
    """
    Carry out a controller action after a successful router match.

    Records the action, controller and named route parameters on the
    connection, then runs the controller's pipeline. Query string and body
    parameters are merged with the named parameters by ParamsFetcher before
    the action is called.
    """
    conn.private.named_params = dict(named_params or {})
    conn.private.action = action
    conn.private.controller = controller
    return controller.call(conn)


dispatch = perform_action
