# parameter_phraser.py
from typing import List

from models import Footnote, NamedType, Parameter
from type_phraser import phrase_type, recursive_phrase, type_text
from utils import bracketed

ELLIPSIS = "..."
INOUT = "inout "


def strip_markers(text: str) -> str:
    """Remove a variadic `...` suffix or an `inout` prefix left in quoted type text."""
    text = text.strip()
    if text.endswith(ELLIPSIS + "`"):
        text = text[: -len(ELLIPSIS) - 1] + "`"
    elif text.endswith(ELLIPSIS):
        text = text[: -len(ELLIPSIS)]
    if text.startswith("`" + INOUT):
        text = "`" + text[len(INOUT) + 1:]
    elif text.startswith(INOUT):
        text = text[len(INOUT):]
    return text.strip()


def phrase_parameter(param: Parameter) -> str:
    """e.g. "an indefinite number of `values` of type `Int`"."""
    type_phrase = strip_markers(phrase_type(param.type, include_children=False, preferred_name=param.local_name or None))

    if param.local_name:
        phrase = f"{bracketed(param.local_name)} of type {type_phrase}"
        if param.is_variadic:
            phrase = "an indefinite number of " + phrase
        elif param.is_inout:
            phrase = "a non-constant " + phrase
    elif param.is_variadic:
        phrase = f"an indefinite number of unnamed inputs of type {type_phrase}"
    elif param.is_inout:
        phrase = f"an unnamed non-constant input of type {type_phrase}"
    else:
        phrase = f"an unnamed input of type {type_phrase}"

    if param.default_value is not None:
        phrase += f" with default value of {bracketed(param.default_value)}"

    return phrase


def _is_plain(param: Parameter) -> bool:
    return isinstance(param.type, NamedType) and not param.type.generic_arguments


def parameter_footnotes(param: Parameter) -> List[Footnote]:
    """Explain argument labels and spell out complex parameter types in full."""
    notes = []
    anchor = f"{param.local_name or '_'}: {type_text(param.type)}"

    label = param.external_name
    if label is not None and label != param.local_name:
        if label == "_":
            text = "Called without an argument label"
        else:
            text = f"Called with the argument label {bracketed(label)}"
        if param.local_name:
            text += f" and referred to as {bracketed(param.local_name)} inside the function"
        notes.append(Footnote(anchor_text=anchor, text=text))

    if not _is_plain(param):
        subject = bracketed(param.local_name) if param.local_name else "an unnamed input"
        notes.append(Footnote(anchor_text=anchor, text=f"Takes {subject} as {recursive_phrase(param.type)}"))

    return notes
