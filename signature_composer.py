# signature_composer.py
"""
Composes the one-sentence English summary of a function declaration.

    func foo(n: Int) -> Int
        -> "Function named `foo` takes input `n` of type `Int` and returns output of `Int`."

The sentence is assembled from segments in a fixed order (effects, modifiers,
name, inputs, output, generic requirements, errors, attributes) and then
normalized by utils.finish_sentence. Footnotes are collected alongside.
"""
import logging
from typing import Iterable, List, Optional

from attribute_resolver import AttributeResolver
from config import DEFAULT_CONFIG, SummarizerConfig
from models import Footnote, GenericConstraint, OptionalType, Signature, ThrowKind, Translation
from parameter_phraser import parameter_footnotes, phrase_parameter, strip_markers
from type_phraser import recursive_phrase, type_text
from utils import bracketed, finish_sentence, itemize

logger = logging.getLogger(__name__)


def _join_segments(segments: List[str]) -> str:
    """Join with single spaces; segments starting with punctuation attach to the previous one."""
    text = ""
    for segment in segments:
        segment = segment.strip()
        if not segment:
            continue
        if segment[0] in ",.":
            if segment[0] == "." and text.endswith(","):
                text = text[:-1]
            text += segment
        else:
            text = f"{text} {segment}" if text else segment
    return text


def phrase_generic(constraint: GenericConstraint) -> str:
    name = bracketed(constraint.parameter_name)
    if constraint.same_type:
        return f"{name} is the same type as {bracketed(constraint.same_type)}"
    if constraint.inherited_type:
        return f"{name} conforms to {bracketed(constraint.inherited_type)}"
    return f"{name} can be any type"


class SignatureComposer:
    def __init__(self, config: Optional[SummarizerConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.resolver = AttributeResolver(self.config.attribute_explanations)

    def compose(self, sig: Signature) -> Translation:
        """Generate the summary sentence and footnotes for one declaration."""
        segments: List[str] = []
        footnotes: List[Footnote] = []

        if sig.is_async:
            segments.append("asynchronous")

        if sig.modifiers:
            segments.append(" ".join(self.config.modifier_words.get(m, m) for m in sig.modifiers))

        segments.append(f"function named {bracketed(sig.name)}")

        # Inputs
        if not sig.parameters:
            segments.append("takes no inputs")
        else:
            verb = "takes inputs" if len(sig.parameters) > 1 else "takes input"
            segments.append(verb)
            segments.append(itemize(phrase_parameter(p) for p in sig.parameters))

        # Output
        if sig.return_type is None:
            segments.append("and returns no output")
        else:
            rt = sig.return_type
            if isinstance(rt, OptionalType):
                wrapped = strip_markers(type_text(rt.wrapped))
                segments.append(f"and returns output of {bracketed(wrapped)} or `nil`")
            else:
                segments.append(f"and returns output of {bracketed(type_text(rt))}")
            footnotes.append(Footnote(anchor_text=type_text(rt), text="Returns " + recursive_phrase(rt)))

        for param in sig.parameters:
            footnotes.extend(parameter_footnotes(param))

        if sig.generics:
            segments.append(", where " + itemize(phrase_generic(g) for g in sig.generics) + ",")

        if sig.throw_kind is ThrowKind.THROWS:
            segments.append("or throws an error")
        elif sig.throw_kind is ThrowKind.RETHROWS:
            segments.append("or throws an error if its input function throws an error")

        # Attributes
        descriptions = []
        for attr in sig.attributes:
            description, footnote = self.resolver.resolve(attr)
            if description:
                descriptions.append(description)
            if footnote:
                footnotes.append(footnote)
        if descriptions:
            segments.append(". It is " + ", ".join(descriptions))

        text = finish_sentence(_join_segments(segments))
        logger.debug("Composed summary for %s: %s", sig.name, text)
        return Translation(text=text, footnotes=tuple(footnotes))


def compose(sig: Signature, config: Optional[SummarizerConfig] = None) -> Translation:
    return SignatureComposer(config).compose(sig)


def compose_all(signatures: Iterable[Signature], config: Optional[SummarizerConfig] = None) -> List[Translation]:
    composer = SignatureComposer(config)
    return [composer.compose(sig) for sig in signatures]
