import pytest

from hirola.app import App
from hirola.dom import Dom
from hirola.router import RouteError


def home_page(_app):
    return Dom.text("Home")


def about_page(_app):
    return Dom.text("About")


def not_found_page(_app):
    return Dom.text("NotFound")


def user(_app):
    return Dom.text("User")


def make_app(state=None):
    app = App(state if state is not None else {})
    app.route("/", home_page)
    app.route("/about", about_page)
    app.route("/users/:id", user)
    app.set_not_found(not_found_page)
    return app


def test_render_home():
    app = make_app()
    assert app.render_to_string("/") == "Home"


def test_render_about():
    app = make_app()
    assert app.render_to_string("/about") == "About"


def test_render_push_and_render_sequence():
    app = make_app()
    assert app.render_to_string("/about") == "About"
    assert app.render_to_string("/") == "Home"
    assert app.render_to_string("/about") == "About"


def test_render_not_found():
    app = make_app()
    assert app.render_to_string("/non_existent_route") == "NotFound"


def test_default_not_found_page():
    app = App({})
    app.route("/", home_page)
    assert app.render_to_string("/missing") == "Not Found"


def test_render_parametrised_route_and_params():
    app = make_app()
    assert app.render_to_string("/users/42") == "User"
    assert app.router.current_params() == {"id": "42"}


def test_params_empty_for_static_route():
    app = make_app()
    app.render_to_string("/about")
    assert app.router.current_params() == {}


def test_render_sets_current_path():
    app = make_app()
    app.render_to_string("/about")
    assert app.router.signal().get() == "/about"


def test_state_is_available_to_pages():
    app = App({"title": "Welcome"})
    app.route("/", lambda a: Dom.text(a.state["title"]))
    assert app.state == {"title": "Welcome"}
    assert app.render_to_string("/") == "Welcome"


def test_element_page_markup():
    def page(_app):
        heading = Dom.element("h1")
        heading.append_child(Dom.text("Home"))
        return heading

    app = App(None)
    app.route("/", page)
    assert app.render_to_string("/") == "<h1>Home</h1>"


def test_page_text_is_escaped():
    app = App(None)
    app.route("/", lambda _a: Dom.text("<b>&"))
    assert app.render_to_string("/") == "&lt;b>&amp;"


def test_conflicting_route_raises():
    app = make_app()
    with pytest.raises(RouteError):
        app.route("/users/:name", user)


def test_page_may_return_string():
    app = App(None)
    app.route("/hello", lambda _a: "Hello World!")
    assert app.render_to_string("/hello") == "Hello World!"


def test_set_not_found_rejects_non_callable():
    app = App(None)
    with pytest.raises(TypeError):
        app.set_not_found("not a page")