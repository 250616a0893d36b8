# utils.py
from typing import Iterable


def itemize(items: Iterable[str]) -> str:
    """
    Join phrases into an English list with an Oxford comma.

    Args:
        items: ordered phrases, e.g. ["`a` of type `Int`", "`b` of type `Int`"]

    Returns:
        str: "" for no items, "A" for one, "A and B" for two,
             "A, B, and C" for three or more.
    """
    items = [str(item) for item in items]

    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return ", ".join(items[:-1]) + f", and {items[-1]}"


def bracketed(text: str, mark: str = "`") -> str:
    return f"{mark}{text}{mark}"


def finish_sentence(text: str) -> str:
    """
    Normalize a composed sentence: drop surrounding commas and whitespace,
    end with exactly one period and upper-case the first letter.
    Empty text stays empty.
    """
    text = text.strip(", \t\r\n")
    if not text:
        return ""

    text = text.rstrip(".") + "."
    return text[0].upper() + text[1:]
