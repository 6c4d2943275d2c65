"""
Naming conventions linking controllers to their views and layouts.

Pure string transforms; whether the named view exists is only checked when
something is rendered.
"""

import re
from typing import Union

_CONTROLLER_SUFFIX = re.compile(r"^(.*)Controller$")


def qualified_name(controller: Union[str, type]) -> str:
    """Dotted name for a controller class (``module.QualName``) or a string."""
    if isinstance(controller, str):
        return controller
    explicit = getattr(controller, "controller_name", None)
    if isinstance(explicit, str):
        return explicit
    return f"{controller.__module__}.{controller.__qualname__}"


def view_module_name(controller: Union[str, type]) -> str:
    """Find the view name for a controller.

    Examples:
        view_module_name("MyApp.UserController")        -> "MyApp.UserView"
        view_module_name("MyApp.Admin.UserController")  -> "MyApp.Admin.UserView"
        view_module_name("MyApp.Users")                 -> "MyApp.Users"
    """
    return _CONTROLLER_SUFFIX.sub(r"\1View", qualified_name(controller))


def layout_module_name(controller: Union[str, type]) -> str:
    """Find the layout view name for a controller, at its root namespace.

    Examples:
        layout_module_name("MyApp.UserController")        -> "MyApp.LayoutView"
        layout_module_name("MyApp.Admin.UserController")  -> "MyApp.LayoutView"
    """
    root = qualified_name(controller).split(".", 1)[0]
    return f"{root}.LayoutView"
