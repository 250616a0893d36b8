# decl_parser.py
"""
Reads Swift function declarations out of source text with tree-sitter.

Only the declaration header is mapped: attributes, modifiers, name, generic
parameters, parameters, effects, return type and `where` clause. Function
bodies are never entered, so nested functions are not reported. Declarations
the grammar cannot parse are logged and skipped.

    parse_declarations(source) -> [Signature, ...]
    parse_declaration("func foo(n: Int) -> Int") -> Signature
"""
import logging
from typing import List, Optional, Tuple

try:
    from tree_sitter import Node, Parser
    from tree_sitter_language_pack import get_language
except ImportError as e:
    raise ImportError(
        "tree-sitter-language-pack is required. " "Install with: pip install tree-sitter tree-sitter-language-pack"
    ) from e

from models import (
    ArrayType,
    AttributedType,
    AttributeUse,
    AvailabilitySpec,
    CompositionType,
    DictionaryType,
    FunctionType,
    GenericConstraint,
    ImplicitlyUnwrappedOptionalType,
    MetatypeType,
    NamedType,
    NoArgument,
    ObjCSelector,
    OpaqueType,
    OptionalType,
    PackExpansionType,
    PackReferenceType,
    Parameter,
    RawArgument,
    Signature,
    ThrowKind,
    TupleType,
    TypeShape,
    UnknownType,
)
from type_phraser import type_text

logger = logging.getLogger(__name__)

FUNCTION_NODES = {"function_declaration", "protocol_function_declaration"}

# Bodyless declarations are only valid Swift inside a protocol.
PROTOCOL_PREFIX = "protocol __Declarations {\n"
PROTOCOL_SUFFIX = "\n}\n"


class DeclarationSyntaxError(ValueError):
    def __init__(self, message: str, offset: int = -1):
        super().__init__(message if offset < 0 else f"{message} (at offset {offset})")
        self.offset = offset


# Global parser instance
_parser: Optional[Parser] = None


def get_parser() -> Parser:
    """Get the shared Swift parser"""
    global _parser
    if _parser is None:
        _parser = Parser(get_language("swift"))
        logger.debug("Loaded swift parser")
    return _parser


def _compact(text: str) -> str:
    return " ".join(text.split())


def _unquote(name: str) -> str:
    return name.strip().strip("`")


def _split_on(nodes: List[Node], separator: str) -> List[List[Node]]:
    """Split sibling nodes into groups at each anonymous `separator` token."""
    groups = [[]]
    for node in nodes:
        if not node.is_named and node.type == separator:
            groups.append([])
        else:
            groups[-1].append(node)
    return groups


class SignatureReader:
    """Maps tree-sitter nodes of one parsed source onto the models records."""

    def __init__(self, source: bytes):
        self.source = source

    def text(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8")

    @staticmethod
    def children(node: Node) -> List[Node]:
        """Children without comments."""
        return [c for c in node.children if not c.is_extra]

    # ---------- Declarations ----------
    def read_function(self, node: Node) -> Signature:
        children = self.children(node)

        attributes: List[AttributeUse] = []
        modifiers: List[str] = []
        name = ""
        generics: List[GenericConstraint] = []
        parameters: List[Parameter] = []
        is_async = False
        throw_kind = ThrowKind.NONE
        return_slot: List[Node] = []
        header_end = node.end_byte
        seen_parameters = False

        idx = 0
        while idx < len(children):
            child = children[idx]
            kind = child.type

            if kind == "modifiers":
                for item in self.children(child):
                    if item.type == "attribute":
                        attributes.append(self.read_attribute(item))
                    elif item.is_named:
                        modifiers.append(self.text(item).replace(" ", ""))
            elif kind == "attribute":
                attributes.append(self.read_attribute(child))
            elif kind == "func" and not child.is_named:
                idx += 1
                name = _unquote(self.text(children[idx]))
            elif kind == "class" and not child.is_named:
                modifiers.append("class")
            elif kind == "type_parameters":
                generics = self.read_generic_parameters(child)
            elif kind == "(" and not seen_parameters and not child.is_named:
                seen_parameters = True
                close = self._matching_close(children, idx)
                parameters = self.read_parameters(children[idx + 1:close])
                idx = close
            elif self.text(child) == "->":
                idx += 1
                while idx < len(children) and children[idx].type not in ("type_constraints", "function_body"):
                    return_slot.append(children[idx])
                    idx += 1
                continue
            elif kind == "type_constraints":
                generics = self.read_where_clause(child, generics)
            elif kind == "function_body":
                header_end = child.start_byte
            elif self.text(child) in ("async", "reasync"):
                is_async = True
            elif kind == "throws" or self.text(child).startswith(("throws", "rethrows")):
                throw_kind = ThrowKind.RETHROWS if self.text(child).startswith("rethrows") else ThrowKind.THROWS
            idx += 1

        return Signature(
            name=name,
            parameters=tuple(parameters),
            return_type=self.read_type_slot(return_slot) if return_slot else None,
            is_async=is_async,
            throw_kind=throw_kind,
            modifiers=tuple(modifiers),
            generics=tuple(generics),
            attributes=tuple(attributes),
            source=self.source[node.start_byte:header_end].decode("utf-8").rstrip(),
        )

    @staticmethod
    def _matching_close(children: List[Node], open_idx: int) -> int:
        for idx in range(open_idx + 1, len(children)):
            if children[idx].type == ")" and not children[idx].is_named:
                return idx
        return len(children)

    def read_attribute(self, node: Node) -> AttributeUse:
        text = _compact(self.text(node))
        head = text[1:].split("(", 1)[0].strip()
        if "(" not in text:
            return AttributeUse(name=head)
        raw = text[text.index("(") + 1:text.rindex(")")].strip()
        return AttributeUse(name=head, argument=self._attribute_argument(head, raw))

    @staticmethod
    def _attribute_argument(name: str, raw: str):
        if name == "available":
            platforms = _availability(raw)
            if platforms:
                return AvailabilitySpec(platforms=tuple(platforms))
            return RawArgument(raw)
        if name == "objc":
            return ObjCSelector(raw)
        if not raw:
            return NoArgument()
        return RawArgument(raw)

    def read_generic_parameters(self, node: Node) -> List[GenericConstraint]:
        generics = []
        for child in self.children(node):
            if child.type == "type_parameter":
                text = _compact(self.text(child))
                if text.startswith("each "):
                    text = text[len("each "):]
                name, _, inherited = text.partition(":")
                generics.append(GenericConstraint(parameter_name=_unquote(name), inherited_type=inherited.strip() or None))
            elif child.type == "type_constraints":
                generics = self.read_where_clause(child, generics)
        return generics

    def read_where_clause(self, node: Node, generics: List[GenericConstraint]) -> List[GenericConstraint]:
        generics = list(generics)
        for child in self.children(node):
            if not child.is_named:
                continue
            text = _compact(self.text(child))
            if "==" in text:
                subject, _, same = text.partition("==")
                constraint = GenericConstraint(subject.strip(), same_type=same.strip())
            elif ":" in text:
                subject, _, inherited = text.partition(":")
                constraint = GenericConstraint(subject.strip(), inherited_type=inherited.strip())
            else:
                logger.debug("Ignoring where-clause requirement %r", text)
                continue

            # `<T> ... where T: P` refines the unconstrained `T`
            for idx, existing in enumerate(generics):
                if (existing.parameter_name == constraint.parameter_name and existing.inherited_type is None
                        and existing.same_type is None and constraint.inherited_type):
                    generics[idx] = constraint
                    break
            else:
                generics.append(constraint)
        return generics

    def read_parameters(self, nodes: List[Node]) -> List[Parameter]:
        """Parameters plus their default values, which sit beside them after `=`."""
        parameters = []
        for group in _split_on(nodes, ","):
            param_node = next((n for n in group if n.type == "parameter"), None)
            if param_node is None:
                continue
            default_value = None
            after = group[group.index(param_node) + 1:]
            if after and self.text(after[0]) == "=":
                value_nodes = after[1:]
                if value_nodes:
                    default_value = self.source[value_nodes[0].start_byte:value_nodes[-1].end_byte].decode("utf-8").strip()
            parameters.append(self.read_parameter(param_node, default_value))
        return parameters

    def read_parameter(self, node: Node, default_value: Optional[str]) -> Parameter:
        children = self.children(node)
        colon = next((i for i, c in enumerate(children) if c.type == ":" and not c.is_named), -1)
        names = [_unquote(self.text(c)) for c in children[:max(colon, 0)]]

        is_inout = False
        is_variadic = False
        modifier_attributes = []
        slot = []
        rest = children[colon + 1:]
        for pos, child in enumerate(rest):
            if self.text(child) == "=" and rest[pos + 1:]:
                default_value = self.source[rest[pos + 1].start_byte:rest[-1].end_byte].decode("utf-8").strip()
                break
            if child.type == "parameter_modifiers":
                for word in self.text(child).split():
                    if word == "inout":
                        is_inout = True
                    elif word.startswith("@"):
                        modifier_attributes.append(word)
            elif self.text(child) == "...":
                is_variadic = True
            else:
                slot.append(child)

        param_type = self.read_type_slot(slot)
        if modifier_attributes:
            if isinstance(param_type, AttributedType):
                param_type = AttributedType(param_type.base, tuple(modifier_attributes) + param_type.attributes)
            else:
                param_type = AttributedType(param_type, tuple(modifier_attributes))

        external_name = names[0] if names else ""
        local_name = names[-1] if names else ""
        if local_name == "_":
            local_name = ""

        return Parameter(
            local_name=local_name,
            type=param_type,
            external_name=external_name,
            default_value=default_value,
            is_variadic=is_variadic,
            is_inout=is_inout,
        )

    # ---------- Types ----------
    def read_type_slot(self, nodes: List[Node]) -> TypeShape:
        """
        A type as it appears in a declaration: leading attributes, the type
        itself and an optional trailing `!`.
        """
        attributes = []
        core = None
        unwrapped = False
        for node in nodes:
            if node.type == "type_modifiers":
                attributes.extend(_compact(self.text(a)) for a in self.children(node) if a.type == "attribute")
            elif node.type == "attribute":
                attributes.append(_compact(self.text(node)))
            elif node.type == "parameter_modifiers":
                continue
            elif self.text(node) == "!":
                unwrapped = True
            elif node.is_named and core is None:
                core = node

        if core is None:
            return UnknownType(_compact(" ".join(self.text(n) for n in nodes)))

        shape = self.read_type(core)
        if unwrapped:
            shape = ImplicitlyUnwrappedOptionalType(shape)
        if attributes:
            shape = AttributedType(base=shape, attributes=tuple(attributes))
        return shape

    def _after_keyword(self, node: Node, keyword: str) -> TypeShape:
        return self.read_type_slot([c for c in self.children(node) if not (c.type == keyword and not c.is_named)])

    def read_type(self, node: Node) -> TypeShape:
        kind = node.type

        if kind == "user_type":
            return self.read_user_type(node)

        if kind in ("type_identifier", "simple_identifier"):
            return NamedType(_unquote(self.text(node)))

        if kind == "array_type":
            return ArrayType(self.read_type_slot([c for c in self.children(node) if c.type not in ("[", "]")]))

        if kind == "dictionary_type":
            inner = [c for c in self.children(node) if c.type not in ("[", "]")]
            groups = _split_on(inner, ":")
            if len(groups) != 2:
                return UnknownType(_compact(self.text(node)))
            return DictionaryType(key=self.read_type_slot(groups[0]), value=self.read_type_slot(groups[1]))

        if kind == "optional_type":
            marks = [c for c in self.children(node) if self.text(c) == "?"]
            shape = self.read_type_slot([c for c in self.children(node) if self.text(c) != "?"])
            for _ in marks:
                shape = OptionalType(shape)
            return shape

        if kind == "tuple_type":
            elements = self.tuple_elements(node)
            if len(elements) == 1:
                return elements[0]
            if not elements:
                return UnknownType("()")
            return TupleType(tuple(elements))

        if kind == "function_type":
            return self.read_function_type(node)

        if kind == "metatype":
            return MetatypeType(_compact(self.text(node)).replace(" ", ""))

        if kind == "opaque_type":
            return OpaqueType(specifier="some", base=self._after_keyword(node, "some"))

        if kind == "existential_type":
            return OpaqueType(specifier="any", base=self._after_keyword(node, "any"))

        if kind == "protocol_composition_type":
            return CompositionType(_compact(self.text(node)))

        if kind == "type_parameter_pack":
            return PackReferenceType(pack=self._after_keyword(node, "each"))

        if kind == "type_pack_expansion":
            return PackExpansionType(pattern=self._after_keyword(node, "repeat"))

        if kind == "suppressed_constraint":
            return NamedType(_compact(self.text(node)).replace(" ", ""))

        logger.debug("No mapping for %s node %r, keeping its text", kind, self.text(node))
        return UnknownType(_compact(self.text(node)))

    def read_user_type(self, node: Node) -> TypeShape:
        """`Publishers.Reduce<Self, T>` -> NamedType("Publishers.Reduce", (Self, T))"""
        segments: List[Tuple[str, Tuple[TypeShape, ...]]] = []
        for child in self.children(node):
            if child.type == "type_arguments":
                name, _ = segments[-1]
                segments[-1] = (name, self.read_type_arguments(child))
            elif child.is_named:
                segments.append((_unquote(self.text(child)), ()))

        if not segments:
            return NamedType(_compact(self.text(node)))

        last_name, last_args = segments[-1]
        prefix = ".".join(type_text(NamedType(name, args)) for name, args in segments[:-1])
        if prefix and last_name in ("Type", "Protocol") and not last_args:
            return MetatypeType(f"{prefix}.{last_name}")
        return NamedType(f"{prefix}.{last_name}" if prefix else last_name, last_args)

    def read_type_arguments(self, node: Node) -> Tuple[TypeShape, ...]:
        inner = [c for c in self.children(node) if c.type not in ("<", ">")]
        return tuple(self.read_type_slot(group) for group in _split_on(inner, ",") if group)

    def tuple_elements(self, node: Node) -> List[TypeShape]:
        items = [c for c in self.children(node) if c.type == "tuple_type_item"]
        if not items:
            inner = [c for c in self.children(node) if c.type not in ("(", ")")]
            return [self.read_type_slot(group) for group in _split_on(inner, ",") if group]

        elements = []
        for item in items:
            children = self.children(item)
            colon = next((i for i, c in enumerate(children) if c.type == ":" and not c.is_named), -1)
            slot = [c for c in children[colon + 1:] if self.text(c) != "..."]
            elements.append(self.read_type_slot(slot))
        return elements

    def read_function_type(self, node: Node) -> FunctionType:
        children = self.children(node)
        arrow = next(i for i, c in enumerate(children) if self.text(c) == "->")

        params = next(
            (c for c in children[:arrow] if c.is_named and c.type != "throws" and self.text(c) != "async"), None
        )
        if params is None:
            parameters = ()
        elif params.type == "tuple_type":
            parameters = tuple(self.tuple_elements(params))
        else:
            parameters = (self.read_type(params),)

        is_async = False
        throw_kind = ThrowKind.NONE
        for child in children[:arrow]:
            text = self.text(child)
            if text == "async":
                is_async = True
            elif text.startswith("rethrows"):
                throw_kind = ThrowKind.RETHROWS
            elif text.startswith("throws"):
                throw_kind = ThrowKind.THROWS

        return FunctionType(
            parameters=parameters,
            return_type=self.read_type_slot(children[arrow + 1:]),
            throw_kind=throw_kind,
            is_async=is_async,
        )


def _availability(raw: str) -> List[Tuple[str, str]]:
    """(platform, version) pairs from both `macOS 13.0, *` and `iOS, introduced: 15.0`."""
    pairs = []
    long_form_platform = None
    for entry in (e.strip() for e in raw.split(",")):
        words = entry.split()
        if long_form_platform and entry.startswith("introduced") and ":" in entry:
            pairs.append((long_form_platform, entry.split(":", 1)[1].strip()))
        elif len(words) >= 2 and words[1][:1].isdigit():
            pairs.append((words[0], words[1]))
        elif len(words) == 1 and words[0].isidentifier() and not pairs and long_form_platform is None:
            long_form_platform = words[0]
    return pairs


def _first_error_offset(node: Node) -> int:
    if node.is_error or node.is_missing:
        return node.start_byte
    for child in node.children:
        if child.has_error:
            return _first_error_offset(child)
    return node.start_byte


def _read_source(source: str, prefix: str = "", suffix: str = "") -> Tuple[List[Signature], List[int]]:
    """Signatures found in prefix + source + suffix, and the offsets (into source) of declarations skipped."""
    data = (prefix + source + suffix).encode("utf-8")
    shift = len(prefix.encode("utf-8"))
    tree = get_parser().parse(data)
    reader = SignatureReader(data)

    signatures, skipped = [], []
    stack = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type in FUNCTION_NODES:
            if node.has_error:
                skipped.append(max(_first_error_offset(node) - shift, 0))
            else:
                signatures.append(reader.read_function(node))
            continue
        stack.extend(reversed(node.children))

    if tree.root_node.has_error and not skipped:
        skipped.append(max(_first_error_offset(tree.root_node) - shift, 0))
    return signatures, skipped


def parse_declarations(source: str) -> List[Signature]:
    """
    Find and parse every function declaration in Swift source text.

    Source files are read as they are. Lists of bare declarations such as
    `func foo(n: Int) -> Int` are read inside a protocol body, where a
    declaration without a body is legal. Whichever reading yields more
    declarations wins. Declarations that still do not parse are logged and
    skipped.
    """
    signatures, skipped = _read_source(source)
    if skipped:
        bodyless, bodyless_skipped = _read_source(source, PROTOCOL_PREFIX, PROTOCOL_SUFFIX)
        if (len(bodyless), -len(bodyless_skipped)) > (len(signatures), -len(skipped)):
            signatures, skipped = bodyless, bodyless_skipped

    for offset in skipped:
        logger.warning("Skipping unparseable declaration at offset %d", offset)
    for sig in signatures:
        logger.debug("Parsed function %s", sig.name)
    return signatures


def parse_declaration(source: str) -> Signature:
    """Parse text that holds exactly one function declaration."""
    signatures = parse_declarations(source)
    if len(signatures) != 1:
        offset = -1
        if not signatures:
            _, skipped = _read_source(source, PROTOCOL_PREFIX, PROTOCOL_SUFFIX)
            offset = skipped[0] if skipped else -1
        raise DeclarationSyntaxError(f"Expected one function declaration, found {len(signatures)}", offset)
    return signatures[0]
