import json

from decl_parser import parse_declaration
from models import Footnote, Translation
from render import (
    ANSI,
    RESET,
    colorize,
    footnote_anchor_prefix,
    highlight_declaration,
    render_html,
    render_json,
    render_plain,
)


def test_render_plain():
    translations = [Translation("A.", (Footnote("x", "y"),)), Translation("B.")]
    assert render_plain(translations) == "A.\n  [1] x: y.\n\nB."
    assert render_plain(translations, include_footnotes=False) == "A.\n\nB."


def test_render_json():
    data = json.loads(render_json([Translation("A.", (Footnote("x", "y"),))]))
    assert data == [{"text": "A.", "footnotes": [{"anchor": "x", "text": "y"}]}]


def test_render_html_escapes_and_links():
    out = render_html(Translation("Takes `a<b>`.", (Footnote("a<b>", "Returns `x`"),)))
    assert "<p>Takes <code>a&lt;b&gt;</code>.<sup><a href=\"#fn-1\">1</a></sup></p>" in out
    assert '<li id="fn-1"><code>a&lt;b&gt;</code>: Returns <code>x</code></li>' in out


def test_render_html_without_footnotes():
    assert render_html(Translation("A.")) == "<p>A.</p>"


def test_colorize():
    assert colorize("hello world", [(0, 5, ANSI.RED)]) == f"\033[31mhello{RESET} world"
    assert colorize("abc", []) == "abc"


def test_highlight_declaration():
    out = highlight_declaration(parse_declaration("func foo(n: Int) -> String"))
    assert ANSI.RED.wrap("foo") in out
    assert ANSI.BLUE.wrap("n") in out
    assert ANSI.GREEN.wrap("String") in out


def test_footnote_ids_unique_per_position():
    translation = Translation("A.", (Footnote("x", "y"),))
    first = render_html(translation, anchor_prefix=footnote_anchor_prefix(0))
    second = render_html(translation, anchor_prefix=footnote_anchor_prefix(1))
    assert 'id="decl0-fn-1"' in first
    assert 'id="decl1-fn-1"' in second
