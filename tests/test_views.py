"""
Tests for Jinja2-backed views, layout wrapping and the view registry.
"""

import os

import pytest
from jinja2 import DictLoader
from markupsafe import Markup

from restcontroller import TemplateNotFoundError, TemplateView, ViewNotFoundError, ViewRegistry
from tests.sample_views import GreetingView

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")


class TestTemplateView:
    """Test rendering Jinja2 templates."""

    def test_renders_file_template(self):
        view = TemplateView(os.path.join(TEMPLATES_DIR, "user"))

        result = view.render("show.html", {"name": "José"})

        assert isinstance(result, Markup)
        assert "<h1>José</h1>" in result

    def test_autoescape_enabled_for_html(self):
        view = TemplateView(os.path.join(TEMPLATES_DIR, "user"))

        result = view.render("show.html", {"name": "<script>alert('xss')</script>"})

        assert "&lt;script&gt;" in result
        assert "<script>" not in result

    def test_unsafe_disables_autoescape(self):
        view = TemplateView(os.path.join(TEMPLATES_DIR, "user"), unsafe=True)

        result = view.render("show.html", {"name": "<em>raw</em>"})

        assert "<h1><em>raw</em></h1>" in result

    def test_text_template(self):
        view = TemplateView(os.path.join(TEMPLATES_DIR, "user"))

        result = view.render("show.txt", {"name": "José"})

        assert "Name: José" in result

    def test_loop_template(self):
        view = TemplateView(os.path.join(TEMPLATES_DIR, "user"))

        result = view.render("index.html", {"users": ["apple", "banana"]})

        assert "<li>apple</li>" in result
        assert "<li>banana</li>" in result

    def test_explicit_loader(self):
        view = TemplateView(loader=DictLoader({"hello.html": "<p>{{ who }}</p>"}))

        assert view.render("hello.html", {"who": "world"}) == "<p>world</p>"

    def test_missing_template(self):
        view = TemplateView(loader=DictLoader({}))

        with pytest.raises(TemplateNotFoundError):
            view.render("nope.html", {})

    def test_missing_template_directory(self):
        view = TemplateView("definitely_not_a_template_dir_or_package")

        with pytest.raises(ViewNotFoundError):
            view.render("show.html", {})


class TestLayoutWrapping:
    """Test the within assign."""

    def test_wraps_in_layout(self):
        layout_view = TemplateView(os.path.join(TEMPLATES_DIR, "layout"))
        view = TemplateView(os.path.join(TEMPLATES_DIR, "user"))

        result = view.render("show.html", {
            "name": "José",
            "title": "Users",
            "within": (layout_view, "application.html"),
        })

        assert "<title>Users</title>" in result
        assert "<body><h1>José</h1></body>" in result

    def test_inner_content_is_not_escaped_twice(self):
        layout_view = TemplateView(loader=DictLoader({"application.html": "<main>{{ inner }}</main>"}))
        view = TemplateView(loader=DictLoader({"show.html": "<b>{{ name }}</b>"}))

        result = view.render("show.html", {"name": "A & B", "within": (layout_view, "application.html")})

        assert result == "<main><b>A &amp; B</b></main>"

    def test_layout_by_name(self):
        registry = ViewRegistry()
        registry.register("MyApp.LayoutView", TemplateView(loader=DictLoader({"application.html": "[{{ inner }}]"})))
        view = TemplateView(loader=DictLoader({"show.html": "x"}), registry=registry)

        assert view.render("show.html", {"within": ("MyApp.LayoutView", "application.html")}) == "[x]"


class TestViewRegistry:
    """Test name to view resolution."""

    def test_register_instance(self):
        registry = ViewRegistry()
        view = GreetingView()
        registry.register("MyApp.GreetingView", view)

        assert registry.resolve("MyApp.GreetingView") is view
        assert "MyApp.GreetingView" in registry
        assert len(registry) == 1

    def test_register_class_as_decorator(self):
        registry = ViewRegistry()

        @registry.register("MyApp.PageView")
        class PageView(GreetingView):
            pass

        assert isinstance(registry.resolve("MyApp.PageView"), PageView)

    def test_imports_unregistered_names(self):
        registry = ViewRegistry()

        view = registry.resolve("tests.sample_views.GreetingView")

        assert isinstance(view, GreetingView)
        assert view.render("show", {"name": "Ann"}) == "<p>show: hello Ann</p>"
        assert "tests.sample_views.GreetingView" in registry

    def test_imported_view_is_cached(self):
        registry = ViewRegistry()

        first = registry.resolve("tests.sample_views.GreetingView")

        assert registry.resolve("tests.sample_views.GreetingView") is first
        assert len(registry) == 1

    def test_unknown_module(self):
        with pytest.raises(ViewNotFoundError):
            ViewRegistry().resolve("NoSuchApp.UserView")

    def test_unknown_attribute(self):
        with pytest.raises(ViewNotFoundError):
            ViewRegistry().resolve("tests.sample_views.MissingView")

    def test_undotted_name(self):
        with pytest.raises(ViewNotFoundError):
            ViewRegistry().resolve("UserView")

    def test_object_without_render(self):
        with pytest.raises(ViewNotFoundError):
            ViewRegistry().resolve("tests.sample_views.not_a_view")

    def test_unregister(self):
        registry = ViewRegistry()
        registry.register("MyApp.GreetingView", GreetingView)
        registry.unregister("MyApp.GreetingView")

        assert "MyApp.GreetingView" not in registry
