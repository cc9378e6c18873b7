import pytest

from hirola.dom import Dom, render_to_string
from hirola.flow import Indexed, Mapped, render_map
from hirola.nodes import NodeKind
from hirola.signals import Mutable, MutableVec


def li(value):
    dom = Dom.element("li")
    dom.append_render(value)
    return dom


def text_content(node):
    if node.kind is NodeKind.TEXT:
        return node.text
    if node.kind is NodeKind.COMMENT:
        return ""
    return "".join(text_content(child) for child in node.children)


def make_list(values, template=lambda item: li(str(item))):
    ul = Dom.element("ul")
    ul.append_render(render_map(values, template))
    return ul


def test_check_effects():
    count = MutableVec([1, 2, 3])
    ul = Dom.element("ul")
    ul.append_render(render_map(count, lambda item: li(str(item))))
    assert (
        render_to_string(ul) == "<ul><li>1</li><li>2</li><li>3</li><!----></ul>"
    )


def test_append():
    count = MutableVec([1, 2])
    ul = make_list(count)
    assert text_content(ul.node) == "12"
    count.push(3)
    assert text_content(ul.node) == "123"
    count.replace(count.items()[1:])
    assert text_content(ul.node) == "23"


def test_swap_rows():
    count = MutableVec([1, 2, 3])
    ul = make_list(count)
    assert text_content(ul.node) == "123"
    count.swap(0, 2)
    assert text_content(ul.node) == "321"
    count.swap(0, 2)
    assert text_content(ul.node) == "123"


def test_delete_row():
    count = MutableVec([1, 2, 3])
    ul = make_list(count)
    count.remove(1)
    assert text_content(ul.node) == "13"


def test_clear():
    count = MutableVec()
    ul = make_list(count)
    assert text_content(ul.node) == ""
    count.replace([1, 2, 3])
    assert text_content(ul.node) == "123"
    count.replace([])
    assert text_content(ul.node) == ""


def test_insert_front():
    count = MutableVec([1, 2, 3])
    ul = make_list(count)
    count.insert(0, 4)
    assert text_content(ul.node) == "4123"


def test_nested_reactivity():
    count = MutableVec([Mutable(1), Mutable(2), Mutable(3)])
    ul = make_list(count, li)
    assert text_content(ul.node) == "123"
    count[0].set(4)
    assert text_content(ul.node) == "423"
    count.push(Mutable(5))
    assert text_content(ul.node) == "4235"


def test_update_pop_and_clear_diffs():
    count = MutableVec([1, 2, 3])
    ul = make_list(count)
    count.set_at(1, 9)
    assert text_content(ul.node) == "193"
    count.pop()
    assert text_content(ul.node) == "19"
    count.clear()
    assert ul.inner_html() == "<ul><!----></ul>"


def test_marker_stays_last():
    count = MutableVec([1])
    ul = make_list(count)
    count.push(2)
    count.insert(0, 0)
    assert ul.inner_html() == "<ul><li>0</li><li>1</li><li>2</li><!----></ul>"


def test_static_list():
    assert render_to_string(render_map([1, 2], lambda i: li(str(i)))) == (
        "<li>1</li><li>2</li><!---->"
    )


def test_enumerate_items():
    ul = make_list(enumerate(["a", "b"]), lambda pair: li(f"{pair[0]}:{pair[1]}"))
    assert text_content(ul.node) == "0:a1:b"


def test_template_may_return_plain_text():
    ul = Dom.element("ul")
    ul.append_render(Indexed(MutableVec(["x", "y"]), lambda item: item))
    assert ul.inner_html() == "<ul>xy<!----></ul>"


def test_discard_stops_list_updates():
    count = MutableVec([1, 2])
    ul = make_list(count)
    ul.discard()
    count.push(9)
    assert text_content(ul.node) == "12"


def test_discard_stops_item_updates():
    item = Mutable(1)
    ul = make_list(MutableVec([item]), li)
    ul.discard()
    item.set(8)
    assert text_content(ul.node) == "1"


def test_mapped_keeps_given_vec():
    count = MutableVec([1])
    mapped = Mapped(count, str)
    assert mapped.iterable is count


def test_out_of_range_change_raises():
    count = MutableVec([1])
    make_list(count)
    with pytest.raises(IndexError):
        count.remove(3)