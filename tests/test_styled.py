import re

from hirola.styled import Style, Styled, class_prefix, styled_class, stylesheet


def _two_selectors() -> Style:
    style = Style()
    style.add("foo", "width", "100px")
    style.add("foo", "height", "100px")
    style.add("bar", "width", "100px")
    style.add("bar", "height", "100px")
    return style


def test_debug_style():
    expected = (
        "foo {\n"
        "    width: 100px;\n"
        "    height: 100px;\n"
        "}\n"
        "bar {\n"
        "    width: 100px;\n"
        "    height: 100px;\n"
        "}\n"
    )
    assert str(_two_selectors()) == expected


def test_debug_style_with_media():
    style = _two_selectors()
    style.add_media("query", _two_selectors())
    expected = (
        "foo {\n"
        "    width: 100px;\n"
        "    height: 100px;\n"
        "}\n"
        "bar {\n"
        "    width: 100px;\n"
        "    height: 100px;\n"
        "}\n"
        "@media query {\n"
        "    foo {\n"
        "        width: 100px;\n"
        "        height: 100px;\n"
        "    }\n"
        "    bar {\n"
        "        width: 100px;\n"
        "        height: 100px;\n"
        "    }\n"
        "}\n"
    )
    assert str(style) == expected


def test_keyframes_display():
    frames = Style()
    frames.add("from", "opacity", "0")
    style = Style()
    style.add_keyframes("fade", frames)
    assert str(style) == "@keyframes fade {\n    from {\n        opacity: 0;\n    }\n}\n"


def test_gen_style_with_media_equal():
    a = _two_selectors()
    a.add_media("query", _two_selectors())
    b = _two_selectors()
    b.add_media("query", _two_selectors())
    assert a == b


def test_different_styles_not_equal():
    a = _two_selectors()
    b = _two_selectors()
    b.add("bar", "height", "50px")
    assert not a == b


def test_add_replaces_existing_property():
    style = Style()
    style.add("foo", "width", "1px")
    style.add("foo", "width", "2px")
    assert str(style) == "foo {\n    width: 2px;\n}\n"


def test_append_merges_rules():
    base = Style()
    base.add("foo", "width", "1px")
    other = Style()
    other.add("foo", "width", "3px")
    other.add("baz", "color", "red")
    media = Style()
    media.add("foo", "height", "1px")
    other.add_media("print", media)
    base.append(other)
    expected = Style()
    expected.add("foo", "width", "3px")
    expected.add("baz", "color", "red")
    expected_media = Style()
    expected_media.add("foo", "height", "1px")
    expected.add_media("print", expected_media)
    assert base == expected


class _Card(Styled):
    @classmethod
    def style(cls) -> Style:
        style = Style()
        style.add(".card", "color", "red")
        return style


class _Banner(Styled):
    @classmethod
    def style(cls) -> Style:
        style = Style()
        style.add(".banner", "margin", "0")
        return style


def test_class_prefix_is_stable_hex():
    prefix = class_prefix(_Card)
    assert re.fullmatch(r"[0-9A-F]+", prefix)
    assert class_prefix(_Card) == prefix
    assert class_prefix(_Card) != class_prefix(_Banner)


def test_styled_class_format():
    assert styled_class(_Card, "title") == f"_{class_prefix(_Card)}__title"
    assert _Card.class_name("title") == styled_class(_Card, "title")


def test_rules_scope_class_selectors():
    style = Style()
    style.add("div .btn:hover", "color", "red")
    style.add("span", "margin", "0")
    prefix = class_prefix(_Card)
    assert style.rules(_Card) == [
        f"div ._{prefix}__btn:hover{{color:red;}}",
        "span{margin:0;}",
    ]


def test_rules_nested_media_and_keyframes():
    inner = Style()
    inner.add("p", "width", "1px")
    style = Style()
    style.add_media("screen", inner)
    style.add_keyframes("spin", inner)
    assert style.rules(_Card) == [
        "@media screen{p{width:1px;}}",
        "@keyframes spin{p{width:1px;}}",
    ]


def test_styled_writes_rules_once():
    node = object()
    before = len(stylesheet())
    assert _Banner.styled(node) is node
    sheet = stylesheet()
    assert sheet[before:] == [f"._{class_prefix(_Banner)}__banner{{margin:0;}}"]
    _Banner.styled(node)
    assert len(stylesheet()) == len(sheet)