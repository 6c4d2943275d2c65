#!/usr/bin/env python3
"""
Example demonstrating controllers, plug pipelines and view rendering.

This example shows:
- A controller with an authentication step that can halt the pipeline
- Rendering by content type (HTML or plain text) inside a layout
- Not-found and error pages, with traces only in development

Note: This script can be run from any directory.
"""

import logging
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jinja2 import DictLoader

from restcontroller import (
    Config,
    Connection,
    Controller,
    Endpoint,
    NotFoundError,
    RouteMatch,
    TemplateView,
    action,
    assign,
    plug,
    redirect,
    registry,
)

USERS = {"1": "José", "2": "Eric"}

registry.register("MyApp.UserView", TemplateView(loader=DictLoader({
    "show.html": "<h1>{{ name }}</h1><p>Viewed by {{ current_user }}</p>",
    "show.txt": "{{ name }} (viewed by {{ current_user }})",
})))
registry.register("MyApp.LayoutView", TemplateView(loader=DictLoader({
    "application.html": "<html><body>{{ inner }}</body></html>",
    "application.txt": "--\n{{ inner }}\n--",
})))


class UserController(Controller, name="MyApp.UserController"):
    plugs = [plug("authenticate", usernames=["jose", "eric", "sonny"])]

    def authenticate(self, conn, options):
        username = conn.get_header("X-User")
        if username in options["usernames"]:
            return assign(conn, "current_user", username)
        return redirect(conn, "/login")

    @action
    def show(self, conn, params):
        name = USERS.get(params["id"])
        if name is None:
            raise NotFoundError(f"No user {params['id']}")
        return self.render(conn, name=name)


def router(method, path):
    parts = path.strip("/").split("/")
    if method == "GET" and len(parts) == 2 and parts[0] == "users":
        return RouteMatch(UserController, "show", {"id": parts[1]})
    return None


def main():
    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    endpoint = Endpoint(router, Config(environment="development"))

    print("=== Controller Example ===\n")

    requests = [
        ("1. HTML page inside the layout:", Connection("GET", "/users/1", {"X-User": "jose"})),
        ("2. Plain text via the Accept header:", Connection("GET", "/users/2", {"X-User": "eric", "Accept": "text/plain"})),
        ("3. Unauthenticated, halted with a redirect:", Connection("GET", "/users/1")),
        ("4. Unknown user, error page with trace:", Connection("GET", "/users/99", {"X-User": "jose"})),
        ("5. No route:", Connection("GET", "/nowhere")),
    ]
    for title, conn in requests:
        print(title)
        conn = endpoint.call(conn)
        print(f"   {conn.status} {conn.resp_content_type}")
        print(f"   {conn.resp_body[:120]!r}\n")


if __name__ == "__main__":
    main()
