"""
Views: objects that turn a template name and assigns into safe markup.

Controllers find their view and layout by name (see ``naming``). Names are
looked up in a ``ViewRegistry``; a name that was never registered is imported
as ``module.Attribute`` the first time it is rendered.
"""

import importlib
import logging
import os
from typing import Any, Dict, Mapping, Optional, Union

from jinja2 import Environment, FileSystemLoader, PackageLoader, TemplateNotFound, select_autoescape
from jinja2.loaders import BaseLoader
from markupsafe import Markup

from .exceptions import TemplateNotFoundError, ViewNotFoundError

logger = logging.getLogger(__name__)


def safe(content: Any) -> Markup:
    """Mark rendered content as trusted, pre-escaped output."""
    return Markup(content)


class View:
    """Base class for views.

    Subclasses implement ``render`` and must return ``markupsafe.Markup``.
    """

    def render(self, template: str, assigns: Mapping[str, Any]) -> Markup:
        raise NotImplementedError

    @property
    def name(self) -> str:
        return self.__class__.__name__


class TemplateView(View):
    """A view backed by a directory (or package) of Jinja2 templates.

    Args:
        package: Directory path or package name holding the templates.
                 If it's a valid directory path, FileSystemLoader is used.
                 Otherwise, PackageLoader is attempted.
        unsafe: If False (default), autoescape is enabled.
        loader: An explicit Jinja2 loader; overrides ``package``.
        registry: Registry used to resolve a layout given by name.

    A ``within`` assign of ``(layout, layout_template)`` renders the template
    first, then renders the layout with the result available as ``inner``.

    Examples:
        TemplateView("templates/user")
        TemplateView(loader=DictLoader({"show.html": "<h1>{{ name }}</h1>"}))
    """

    def __init__(
        self,
        package: str = "templates",
        unsafe: bool = False,
        loader: Optional[BaseLoader] = None,
        registry: Optional["ViewRegistry"] = None,
    ):
        self.package = package
        self.unsafe = unsafe
        self.registry = registry
        self._loader = loader
        self._environment: Optional[Environment] = None

    @property
    def environment(self) -> Environment:
        if self._environment is None:
            loader = self._loader or _find_loader(self.package)
            # Note: autoescape can be disabled via unsafe=True for trusted content
            self._environment = Environment(  # nosec B701
                loader=loader,
                autoescape=select_autoescape() if not self.unsafe else False,
            )
        return self._environment

    def render(self, template: str, assigns: Mapping[str, Any]) -> Markup:
        assigns = dict(assigns)
        within = assigns.pop("within", None)
        content = self.render_template(template, assigns)
        if within is None:
            return content

        layout, layout_template = within
        if isinstance(layout, str):
            layout = (self.registry if self.registry is not None else registry).resolve(layout)
        logger.debug(f"Wrapping {template} in layout {layout_template}")
        return layout.render(layout_template, {**assigns, "inner": content})

    def render_template(self, template: str, assigns: Mapping[str, Any]) -> Markup:
        try:
            template_obj = self.environment.get_template(template)
        except TemplateNotFound as e:
            raise TemplateNotFoundError(template, self.package) from e
        return Markup(template_obj.render(**assigns))


def _find_loader(package: str) -> BaseLoader:
    """Pick a FileSystemLoader for a directory, else a PackageLoader."""
    if os.path.isdir(package):
        return FileSystemLoader(package)

    possible_paths = [
        os.path.join(os.getcwd(), package),
        os.path.join(os.path.dirname(os.path.dirname(__file__)), package),
    ]
    for path in possible_paths:
        if os.path.isdir(path):
            return FileSystemLoader(path)

    try:
        return PackageLoader(package)
    except (ImportError, ValueError) as e:
        raise ViewNotFoundError(
            package,
            f"no template directory or package (tried {', '.join(possible_paths)})",
        ) from e


class ViewRegistry:
    """Maps dotted view names to view objects.

    Example::

        views = ViewRegistry()
        views.register("MyApp.UserView", TemplateView("templates/user"))

        @views.register("MyApp.LayoutView")
        class LayoutView(TemplateView):
            ...
    """

    def __init__(self):
        self._views: Dict[str, View] = {}

    def register(self, name: str, view: Union[View, type, None] = None):
        """Register a view instance or class under ``name``.

        Without ``view``, returns a class decorator.
        """
        if view is None:
            def decorator(cls):
                self.register(name, cls)
                return cls
            return decorator

        if isinstance(view, type):
            view = view()
        self._views[name] = view
        return view

    def unregister(self, name: str) -> None:
        self._views.pop(name, None)

    def resolve(self, name: str) -> View:
        """Find the view registered as ``name``, importing it if needed.

        An imported view is cached under ``name``. The first cached object
        wins, so concurrent first lookups all end up rendering with the same
        view, and registered views are never replaced.

        Raises:
            ViewNotFoundError: If nothing by that name exists or it has no
                callable ``render``.
        """
        view = self._views.get(name)
        if view is None:
            view = self._views.setdefault(name, self._import(name))
        if not callable(getattr(view, "render", None)):
            raise ViewNotFoundError(name, "object has no render()")
        return view

    def _import(self, name: str) -> View:
        module_name, _, attribute = name.rpartition(".")
        if not module_name:
            raise ViewNotFoundError(name, "not registered")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ViewNotFoundError(name, f"not registered and {e}") from e

        view = getattr(module, attribute, None)
        if view is None:
            raise ViewNotFoundError(name, f"module {module_name!r} has no attribute {attribute!r}")
        if isinstance(view, type):
            view = view()
        logger.debug(f"Imported view {name}")
        return view

    def __contains__(self, name: object) -> bool:
        return name in self._views

    def __len__(self):
        return len(self._views)


# Default registry shared by controllers that don't set their own
registry = ViewRegistry()
