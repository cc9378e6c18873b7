import asyncio

import pytest

from hirola.dom import Dom, RenderError, render_into, render_to_string
from hirola.nodes import SsrNode
from hirola.signals import Mutable


def paragraph(content):
    dom = Dom.element("p")
    dom.append_render(content)
    return dom


def test_hello_world():
    assert render_to_string(paragraph("Hello World!")) == "<p>Hello World!</p>"


def test_reactive_text():
    count = Mutable(0)
    assert render_to_string(paragraph(count)) == "<p>0</p>"
    count.set(1)
    assert render_to_string(paragraph(count)) == "<p>1</p>"


def test_ssr_small_app():
    container = Dom.element("div")
    container.attribute("class", "my-container")
    container.append_render(paragraph("Hello World!"))
    assert (
        render_to_string(container)
        == '<div class="my-container"><p>Hello World!</p></div>'
    )


def test_live_tree_follows_mutable():
    count = Mutable(0)
    span = Dom.element("span")
    span.append_render(count)
    count.set(5)
    assert span.inner_html() == "<span>5</span>"


def test_discard_stops_updates():
    count = Mutable(1)
    span = Dom.element("span")
    span.append_render(count)
    span.discard()
    count.set(7)
    assert span.inner_html() == "<span>1</span>"
    assert span.side_effects == []


def test_read_only_view_renders():
    count = Mutable("a")
    span = Dom.element("span")
    span.append_render(count.read_only())
    count.set("b")
    assert span.inner_html() == "<span>b</span>"


def test_sequences_and_none():
    dom = Dom.element("div")
    dom.append_render(("a", None, ["b", "c"]))
    assert dom.inner_html() == "<div>abc</div>"


def test_text_is_escaped():
    assert render_to_string("<a & b>") == "&lt;a &amp; b>"


def test_attribute_is_escaped():
    dom = Dom.element("a")
    dom.attribute("title", 'x"y')
    assert dom.inner_html() == '<a title="x&quot;y"></a>'


def test_unsupported_value_raises():
    with pytest.raises(TypeError):
        render_to_string(42)


def test_append_to_text_raises_render_error():
    with pytest.raises(RenderError):
        Dom.text("a").append_child(Dom.text("b"))


def test_mount_places_content_under_node():
    target = SsrNode.element("section")
    mounted = paragraph("hi").mount(target)
    assert mounted.node is target
    assert str(target) == "<section><p>hi</p></section>"
    assert len(mounted.children) == 1


def test_default_dom_is_fragment():
    dom = Dom()
    render_into(["x", "y"], dom)
    assert dom.inner_html() == "xy"


def test_events_dispatch_and_discard():
    seen = []
    dom = Dom.element("button")
    dom.event("click", seen.append)
    assert dom.dispatch("click", "e1") == 1
    assert seen == ["e1"]
    dom.discard()
    assert dom.dispatch("click", "e2") == 0
    assert seen == ["e1"]


def test_effect_rejects_other_values():
    with pytest.raises(TypeError):
        Dom().effect(3)


def test_effect_without_loop_is_inactive():
    async def job():
        return None

    handle = Dom().effect(job())
    assert handle.active is False


@pytest.mark.asyncio
async def test_effect_runs_coroutine():
    ran = []

    async def job():
        ran.append(1)

    dom = Dom()
    dom.effect(job())
    await asyncio.sleep(0)
    assert ran == [1]
    assert len(dom.side_effects) == 1


@pytest.mark.asyncio
async def test_discard_cancels_running_effect():
    started, finished = [], []

    async def job():
        started.append(1)
        await asyncio.sleep(10)
        finished.append(1)

    dom = Dom()
    dom.effect(job())
    await asyncio.sleep(0)
    assert len(dom.side_effects) == 1
    dom.discard()
    await asyncio.sleep(0)
    assert dom.side_effects == []
    assert started == [1]
    assert finished == []