from __future__ import annotations

from showmore.delivery.templates import render_more, render_page
from showmore.widget.controller import ToggleController

LONG = "<p>Hello <b>world</b>, this is long</p>"


def test_no_control_renders_content_verbatim(controller: ToggleController):
    view = controller.attach("a", "<p>Tiny</p>")
    assert render_more(view) == "<p>Tiny</p>"


def test_collapsed_markup(controller: ToggleController):
    html = render_more(controller.attach("a", LONG, {"length": 13, "leeway": 0}))

    assert '<span class="more-showing"><p>Hello <b>world</b>, </p></span>' in html
    assert '<span class="more-ellipsis">...</span>' in html
    assert '<span class="more-hidden" hidden><p>this is long</p></span>' in html
    assert '<a href="#" class="more-link" data-more-handle="a">Show more</a>' in html


def test_expanded_markup(controller: ToggleController):
    controller.attach("a", LONG, {"length": 13, "leeway": 0})
    html = render_more(controller.toggle("a"))

    assert '<span class="more-ellipsis" hidden>' in html
    assert '<span class="more-hidden"><p>this is long</p></span>' in html
    assert ">Show less</a>" in html


def test_removed_control_is_not_rendered(controller: ToggleController):
    controller.attach("a", LONG, {"length": 13, "leeway": 0, "toggle": False})
    html = render_more(controller.toggle("a"))

    assert "more-link" not in html
    assert "this is long" in html


def test_labels_are_escaped(controller: ToggleController):
    view = controller.attach("a", LONG, {"length": 13, "leeway": 0, "moreText": "<b>More</b>"})
    assert "&lt;b&gt;More&lt;/b&gt;" in render_more(view)


def test_page_wraps_body():
    html = render_page("<span>x</span>", title="Demo")

    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Demo</title>" in html
    assert "<span>x</span>" in html
