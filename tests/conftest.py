"""
Shared fixtures for controller, pipeline and rendering tests.
"""

import os

import pytest
from jinja2 import DictLoader

from restcontroller import Connection, TemplateView, ViewRegistry

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")


@pytest.fixture
def views():
    """A fresh registry with file-backed MyApp views."""
    registry = ViewRegistry()
    registry.register("MyApp.UserView", TemplateView(os.path.join(TEMPLATES_DIR, "user"), registry=registry))
    registry.register("MyApp.LayoutView", TemplateView(os.path.join(TEMPLATES_DIR, "layout"), registry=registry))
    return registry


@pytest.fixture
def inline_views():
    """A fresh registry with in-memory templates."""
    registry = ViewRegistry()
    registry.register("MyApp.UserView", TemplateView(loader=DictLoader({
        "show.html": "<h1>{{ name }}</h1>",
        "show.json": '{"name": "{{ name }}"}',
        "show": "name={{ name }}",
        "index.html": "<ul>{% for u in users %}<li>{{ u }}</li>{% endfor %}</ul>",
    }), registry=registry))
    registry.register("MyApp.LayoutView", TemplateView(loader=DictLoader({
        "application.html": "<main>{{ inner }}</main>",
        "application.json": "{{ inner }}",
        "admin.html": "<section>{{ inner }}</section>",
    }), registry=registry))
    return registry


@pytest.fixture
def make_conn():
    """Build a Connection with sensible defaults."""

    def _make(method="GET", path="/", headers=None, **kwargs):
        return Connection(method, path, headers or {}, **kwargs)

    return _make
