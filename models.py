# models.py
"""
Immutable records describing one Swift function declaration and the
natural-language translation produced for it.

The parser in decl_parser.py builds these; everything downstream only reads them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class ThrowKind(Enum):
    NONE = "none"
    THROWS = "throws"
    RETHROWS = "rethrows"


# ---------- Type shapes ----------

@dataclass(frozen=True)
class NamedType:
    name: str
    generic_arguments: Tuple["TypeShape", ...] = ()


@dataclass(frozen=True)
class ArrayType:
    element: "TypeShape"


@dataclass(frozen=True)
class DictionaryType:
    key: "TypeShape"
    value: "TypeShape"


@dataclass(frozen=True)
class OptionalType:
    wrapped: "TypeShape"


@dataclass(frozen=True)
class ImplicitlyUnwrappedOptionalType:
    wrapped: "TypeShape"


@dataclass(frozen=True)
class TupleType:
    elements: Tuple["TypeShape", ...]


@dataclass(frozen=True)
class FunctionType:
    parameters: Tuple["TypeShape", ...]
    return_type: "TypeShape"
    throw_kind: ThrowKind = ThrowKind.NONE
    is_async: bool = False


@dataclass(frozen=True)
class AttributedType:
    base: "TypeShape"
    attributes: Tuple[str, ...] = ()

    @property
    def is_escaping(self) -> bool:
        return "@escaping" in self.attributes


@dataclass(frozen=True)
class CompositionType:
    text: str


@dataclass(frozen=True)
class OpaqueType:
    specifier: str
    base: "TypeShape"


@dataclass(frozen=True)
class PackExpansionType:
    pattern: "TypeShape"
    preferred_name: Optional[str] = None


@dataclass(frozen=True)
class PackReferenceType:
    pack: "TypeShape"


@dataclass(frozen=True)
class MetatypeType:
    text: str


@dataclass(frozen=True)
class UnknownType:
    text: str


TypeShape = Union[
    NamedType,
    ArrayType,
    DictionaryType,
    OptionalType,
    ImplicitlyUnwrappedOptionalType,
    TupleType,
    FunctionType,
    AttributedType,
    CompositionType,
    OpaqueType,
    PackExpansionType,
    PackReferenceType,
    MetatypeType,
    UnknownType,
]


# ---------- Attributes ----------

@dataclass(frozen=True)
class NoArgument:
    pass


@dataclass(frozen=True)
class AvailabilitySpec:
    """One or more (platform, version) pairs from @available(...)."""
    platforms: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class ObjCSelector:
    selector: str


@dataclass(frozen=True)
class RawArgument:
    text: str


AttributeArgument = Union[NoArgument, AvailabilitySpec, ObjCSelector, RawArgument]


@dataclass(frozen=True)
class AttributeUse:
    name: str
    argument: AttributeArgument = field(default_factory=NoArgument)

    @property
    def text(self) -> str:
        """Literal source form, e.g. `@main` or `@objc(doThing:)`."""
        arg = self.argument
        if isinstance(arg, AvailabilitySpec):
            inner = ", ".join(f"{p} {v}" for p, v in arg.platforms)
            return f"@{self.name}({inner}, *)"
        if isinstance(arg, ObjCSelector):
            return f"@{self.name}({arg.selector})"
        if isinstance(arg, RawArgument):
            return f"@{self.name}({arg.text})"
        return f"@{self.name}"


# ---------- Declarations ----------

@dataclass(frozen=True)
class Parameter:
    local_name: str
    type: TypeShape
    external_name: Optional[str] = None
    default_value: Optional[str] = None
    is_variadic: bool = False
    is_inout: bool = False


@dataclass(frozen=True)
class GenericConstraint:
    parameter_name: str
    inherited_type: Optional[str] = None
    same_type: Optional[str] = None


@dataclass(frozen=True)
class Signature:
    name: str
    parameters: Tuple[Parameter, ...] = ()
    return_type: Optional[TypeShape] = None
    is_async: bool = False
    throw_kind: ThrowKind = ThrowKind.NONE
    modifiers: Tuple[str, ...] = ()
    generics: Tuple[GenericConstraint, ...] = ()
    attributes: Tuple[AttributeUse, ...] = ()
    source: Optional[str] = None


# ---------- Output ----------

@dataclass(frozen=True)
class Footnote:
    anchor_text: str
    text: str


@dataclass(frozen=True)
class Translation:
    text: str
    footnotes: Tuple[Footnote, ...] = ()

    def as_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "footnotes": [{"anchor": f.anchor_text, "text": f.text} for f in self.footnotes],
        }
