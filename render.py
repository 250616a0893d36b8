# render.py
"""
Output formats for translations: plain text, JSON, HTML with footnote
anchors, and ANSI colouring of the original declaration.
"""
import html
import json
import re
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

from models import Signature, Translation


def render_plain(translations: Iterable[Translation], include_footnotes: bool = True) -> str:
    """Summaries separated by a blank line, each followed by its numbered footnotes."""
    blocks = []
    for translation in translations:
        lines = [translation.text]
        if include_footnotes:
            for n, note in enumerate(translation.footnotes, start=1):
                lines.append(f"  [{n}] {note.anchor_text}: {note.text}.")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_json(translations: Iterable[Translation], indent: int = 2) -> str:
    return json.dumps([t.as_dict() for t in translations], indent=indent)


def _inline_code(text: str) -> str:
    """Escape text and turn `quoted` spans into <code> elements."""
    return re.sub(r"`([^`]*)`", r"<code>\1</code>", html.escape(text, quote=False))


def footnote_anchor_prefix(index: int) -> str:
    """Anchor prefix for the index-th summary on a page."""
    return f"decl{index}-fn"


def render_html(translation: Translation, anchor_prefix: str = "fn") -> str:
    """
    The sentence followed by an ordered list of footnotes. The superscript
    links all follow the sentence; the nth link points at the nth footnote,
    not at the place in the sentence where its anchor text appears.
    """
    marks = "".join(
        f'<sup><a href="#{anchor_prefix}-{n}">{n}</a></sup>'
        for n in range(1, len(translation.footnotes) + 1)
    )
    parts = [f"<p>{_inline_code(translation.text)}{marks}</p>"]
    if translation.footnotes:
        parts.append("<ol>")
        for n, note in enumerate(translation.footnotes, start=1):
            parts.append(
                f'<li id="{anchor_prefix}-{n}"><code>{html.escape(note.anchor_text)}</code>: '
                f"{_inline_code(note.text)}</li>"
            )
        parts.append("</ol>")
    return "\n".join(parts)


# ---------- Terminal highlighting ----------

class ANSI(Enum):
    RED = "\033[31m"
    BLUE = "\033[34m"
    GREEN = "\033[32m"

    def wrap(self, text: str) -> str:
        return f"{self.value}{text}{RESET}"


RESET = "\033[0m"


def colorize(text: str, spans: Sequence[Tuple[int, int, ANSI]]) -> str:
    """Wrap each (start, end) range of text in its colour. Overlapping spans after the first are dropped."""
    result = []
    current = 0
    for start, end, color in sorted(spans, key=lambda s: s[0]):
        if start < current:
            continue
        result.append(text[current:start])
        result.append(color.wrap(text[start:end]))
        current = end
    result.append(text[current:])
    return "".join(result)


def _parameter_clause_end(source: str, pos: int) -> int:
    """Offset just past the `)` that closes the first parameter clause at or after pos."""
    open_at = source.find("(", pos)
    if open_at < 0:
        return pos
    depth = 0
    for idx in range(open_at, len(source)):
        if source[idx] == "(":
            depth += 1
        elif source[idx] == ")":
            depth -= 1
            if depth == 0:
                return idx + 1
    return len(source)


def declaration_spans(sig: Signature) -> List[Tuple[int, int, ANSI]]:
    """Locate the name (red), parameter names (blue) and return type (green) in sig.source."""
    source = sig.source or ""
    spans = []

    name_match = re.search(r"\bfunc\s+`?(" + re.escape(sig.name) + ")`?", source)
    if not name_match:
        return spans
    spans.append((name_match.start(1), name_match.end(1), ANSI.RED))

    cursor = name_match.end()
    for param in sig.parameters:
        if not param.local_name:
            continue
        match = re.compile(r"\b`?(" + re.escape(param.local_name) + r")`?\s*:").search(source, cursor)
        if match:
            spans.append((match.start(1), match.end(1), ANSI.BLUE))
            cursor = match.end()

    if sig.return_type is not None:
        arrow = source.find("->", _parameter_clause_end(source, name_match.end()))
        if arrow >= 0:
            end = len(source)
            where = re.compile(r"\swhere\s").search(source, arrow)
            if where:
                end = where.start()
            start = arrow + 2
            while start < end and source[start].isspace():
                start += 1
            spans.append((start, end, ANSI.GREEN))

    return spans


def highlight_declaration(sig: Signature) -> str:
    return colorize(sig.source or "", declaration_spans(sig))
