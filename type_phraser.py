# type_phraser.py
"""
Turns a TypeShape tree into an English noun phrase.

    phrase_type(ArrayType(ArrayType(NamedType("Int"))))  -> "array of array of `Int`"
    phrase_type(OptionalType(NamedType("String")))       -> "`String` or nil"

With include_children=False only the outermost shape is described and every
nested type is quoted as source text, which keeps parameter lists short:

    phrase_type(ArrayType(ArrayType(NamedType("Int"))), include_children=False)
        -> "array of `[Int]`"
"""
import logging
from typing import Optional

from models import (
    ArrayType,
    AttributedType,
    CompositionType,
    DictionaryType,
    FunctionType,
    ImplicitlyUnwrappedOptionalType,
    MetatypeType,
    NamedType,
    OpaqueType,
    OptionalType,
    PackExpansionType,
    PackReferenceType,
    ThrowKind,
    TupleType,
    TypeShape,
    UnknownType,
)
from utils import bracketed, itemize

logger = logging.getLogger(__name__)

ARITY_WORDS = {0: "nullary", 1: "unary", 2: "binary", 3: "ternary"}

# `some P` is an opaque type, `any P` a boxed existential
SPECIFIER_WORDS = {"some": "opaque", "any": "existential"}


def arity_word(count: int) -> str:
    return ARITY_WORDS.get(count, f"{count}-ary")


# ---------- Source text ----------

def _needs_parens(shape: TypeShape) -> bool:
    """Shapes that must be parenthesized before a trailing `?` or `!`."""
    return isinstance(shape, (FunctionType, AttributedType, CompositionType, OpaqueType))


def type_text(shape: TypeShape) -> str:
    """Render the canonical Swift spelling of a type shape."""
    if isinstance(shape, NamedType):
        if shape.generic_arguments:
            args = ", ".join(type_text(a) for a in shape.generic_arguments)
            return f"{shape.name}<{args}>"
        return shape.name

    if isinstance(shape, ArrayType):
        return f"[{type_text(shape.element)}]"

    if isinstance(shape, DictionaryType):
        return f"[{type_text(shape.key)}: {type_text(shape.value)}]"

    if isinstance(shape, (OptionalType, ImplicitlyUnwrappedOptionalType)):
        inner = type_text(shape.wrapped)
        if _needs_parens(shape.wrapped):
            inner = f"({inner})"
        return inner + ("?" if isinstance(shape, OptionalType) else "!")

    if isinstance(shape, TupleType):
        return "(" + ", ".join(type_text(e) for e in shape.elements) + ")"

    if isinstance(shape, FunctionType):
        text = "(" + ", ".join(type_text(p) for p in shape.parameters) + ")"
        if shape.is_async:
            text += " async"
        if shape.throw_kind is not ThrowKind.NONE:
            text += f" {shape.throw_kind.value}"
        return f"{text} -> {type_text(shape.return_type)}"

    if isinstance(shape, AttributedType):
        return " ".join(list(shape.attributes) + [type_text(shape.base)])

    if isinstance(shape, OpaqueType):
        return f"{shape.specifier} {type_text(shape.base)}"

    if isinstance(shape, PackExpansionType):
        return f"repeat {type_text(shape.pattern)}"

    if isinstance(shape, PackReferenceType):
        return f"each {type_text(shape.pack)}"

    if isinstance(shape, (CompositionType, MetatypeType, UnknownType)):
        return shape.text

    logger.warning("No source rendering for %r", shape)
    return str(shape)


# ---------- Phrases ----------

def _child(shape: TypeShape, include_children: bool) -> str:
    if include_children:
        return phrase_type(shape, include_children=True)
    return bracketed(type_text(shape))


def phrase_type(shape: TypeShape, include_children: bool = True, preferred_name: Optional[str] = None) -> str:
    """
    Describe a type in English.

    Args:
        shape: the type to describe
        include_children: recurse into nested types instead of quoting them
        preferred_name: name used for pack expansions, normally the parameter's local name

    Returns:
        str: a phrase such as "dictionary mapping `String` to `Int`"
    """
    if isinstance(shape, NamedType):
        if shape.generic_arguments and include_children:
            args = [phrase_type(a, include_children=True) for a in shape.generic_arguments]
            return f"{bracketed(shape.name)} of {itemize(args)}"
        return bracketed(type_text(shape))

    if isinstance(shape, ArrayType):
        return "array of " + _child(shape.element, include_children)

    if isinstance(shape, DictionaryType):
        return f"dictionary mapping {_child(shape.key, include_children)} to {_child(shape.value, include_children)}"

    if isinstance(shape, OptionalType):
        return _child(shape.wrapped, include_children) + " or nil"

    if isinstance(shape, ImplicitlyUnwrappedOptionalType):
        return "implicitly unwrapped optional of " + _child(shape.wrapped, include_children)

    if isinstance(shape, TupleType):
        elements = [_child(e, include_children) for e in shape.elements]
        return f"{len(shape.elements)}-tuple of {itemize(elements)}"

    if isinstance(shape, FunctionType):
        words = [arity_word(len(shape.parameters))]
        if shape.is_async:
            words.append("asynchronous")
        if shape.throw_kind is not ThrowKind.NONE:
            words.append("throwing")
        words.append("function that returns")
        words.append(_child(shape.return_type, include_children))
        return " ".join(words)

    if isinstance(shape, AttributedType):
        text = _child(shape.base, include_children)
        if shape.is_escaping:
            text += " escaping closure"
        return text

    if isinstance(shape, PackExpansionType):
        name = preferred_name or shape.preferred_name
        parameters = bracketed(name) if name else "parameters"
        return f"an indefinite number of {parameters} of type {phrase_type(shape.pattern, include_children)}"

    if isinstance(shape, PackReferenceType):
        return "reference to variadic pack " + _child(shape.pack, include_children)

    if isinstance(shape, OpaqueType):
        word = SPECIFIER_WORDS.get(shape.specifier, shape.specifier)
        return f"{word} {_child(shape.base, include_children)}"

    if isinstance(shape, (CompositionType, MetatypeType, UnknownType)):
        return bracketed(shape.text)

    logger.warning("Unrecognized type shape %r, quoting it verbatim", shape)
    return bracketed(str(getattr(shape, "text", shape)))


def recursive_phrase(shape: TypeShape) -> str:
    return phrase_type(shape, include_children=True)
