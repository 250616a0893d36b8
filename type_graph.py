# type_graph.py
import logging
import os
import re
import tempfile
import zipfile

import networkx as nx
from graphviz import CalledProcessError, ExecutableNotFound, Source

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
    Signature,
    TupleType,
    TypeShape,
    UnknownType,
)
from type_phraser import type_text

logger = logging.getLogger(__name__)

KIND_LABELS = {
    NamedType: "Named",
    ArrayType: "Array",
    DictionaryType: "Dictionary",
    OptionalType: "Optional",
    ImplicitlyUnwrappedOptionalType: "Implicitly unwrapped",
    TupleType: "Tuple",
    FunctionType: "Function",
    AttributedType: "Attributed",
    OpaqueType: "Opaque",
    PackExpansionType: "Pack expansion",
    PackReferenceType: "Pack reference",
    CompositionType: "Composition",
    MetatypeType: "Metatype",
    UnknownType: "Unknown",
}

NODE_STYLES = {
    "function": 'shape=ellipse, style=filled, fillcolor=lightgray',
    "parameter": 'shape=box, style=filled, fillcolor=lightblue',
    "return": 'shape=box, style=filled, fillcolor=lightgreen',
    "type": 'shape=box',
}


def child_shapes(shape: TypeShape):
    """Direct children of a type shape, with the edge label that leads to each."""
    if isinstance(shape, NamedType):
        return [("argument", a) for a in shape.generic_arguments]
    if isinstance(shape, ArrayType):
        return [("element", shape.element)]
    if isinstance(shape, DictionaryType):
        return [("key", shape.key), ("value", shape.value)]
    if isinstance(shape, (OptionalType, ImplicitlyUnwrappedOptionalType)):
        return [("wrapped", shape.wrapped)]
    if isinstance(shape, TupleType):
        return [(str(i), e) for i, e in enumerate(shape.elements)]
    if isinstance(shape, FunctionType):
        return [(f"arg {i}", p) for i, p in enumerate(shape.parameters)] + [("returns", shape.return_type)]
    if isinstance(shape, (AttributedType, OpaqueType)):
        return [("base", shape.base)]
    if isinstance(shape, PackExpansionType):
        return [("pattern", shape.pattern)]
    if isinstance(shape, PackReferenceType):
        return [("pack", shape.pack)]
    return []


class TypeGraphBuilder:
    def __init__(self):
        self.graph = nx.DiGraph()
        self.counter = 0

    def _new_node(self, label, kind="type"):
        """Create unique node id with label"""
        self.counter += 1
        node_id = f"n{self.counter}"
        self.graph.add_node(node_id, label=label, kind=kind)
        return node_id

    def build(self, sig: Signature) -> nx.DiGraph:
        """Entry point: function node, one node per parameter and return type, then nested types."""
        root = self._new_node(f"func {sig.name}", kind="function")

        for param in sig.parameters:
            name = param.local_name or "_"
            suffix = "..." if param.is_variadic else ""
            param_id = self._new_node(f"{name}: {type_text(param.type)}{suffix}", kind="parameter")
            self.graph.add_edge(root, param_id, label="input")
            self._add_shape(param.type, param_id, "type")

        if sig.return_type is not None:
            ret_id = self._new_node(type_text(sig.return_type), kind="return")
            self.graph.add_edge(root, ret_id, label="output")
            for edge_label, child in child_shapes(sig.return_type):
                self._add_shape(child, ret_id, edge_label)

        return self.graph

    def _add_shape(self, shape: TypeShape, parent: str, edge_label: str):
        kind = KIND_LABELS.get(type(shape), type(shape).__name__)
        node_id = self._new_node(f"{kind}: {type_text(shape)}")
        self.graph.add_edge(parent, node_id, label=edge_label)
        for child_label, child in child_shapes(shape):
            self._add_shape(child, node_id, child_label)
        return node_id


def build_type_graph(sig: Signature) -> nx.DiGraph:
    return TypeGraphBuilder().build(sig)


def _escape(label: str) -> str:
    return label.replace("\\", "\\\\").replace('"', '\\"')


def dot_for_signature(sig: Signature, name: str = "types") -> str:
    """Graphviz DOT source for a signature's type structure."""
    graph = build_type_graph(sig)
    lines = [f'digraph "{_escape(name)}" {{', "  node [shape=box];"]
    for node_id, data in graph.nodes(data=True):
        style = NODE_STYLES.get(data.get("kind"), NODE_STYLES["type"])
        lines.append(f'  {node_id} [label="{_escape(data["label"])}", {style}];')
    for u, v, data in graph.edges(data=True):
        lines.append(f'  {u} -> {v} [label="{_escape(data.get("label", ""))}"];')
    lines.append("}")
    return "\n".join(lines)


def graphs_zip(signatures) -> bytes:
    """
    Zip one PNG per signature; when the Graphviz binaries are missing the DOT
    source is stored instead.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        zip_path = os.path.join(tmpdir, "type_graphs.zip")
        with zipfile.ZipFile(zip_path, "w") as zipf:
            for idx, sig in enumerate(signatures):
                fname = f"{idx:02d}_" + re.sub(r"\W", "_", sig.name)
                dot_src = dot_for_signature(sig, name=sig.name)
                try:
                    out_path = os.path.join(tmpdir, fname)
                    Source(dot_src).render(out_path, format="png", cleanup=True)
                    zipf.write(out_path + ".png", arcname=f"{fname}.png")
                except (ExecutableNotFound, CalledProcessError) as e:
                    logger.warning("Graphviz render failed for %s, storing DOT: %s", sig.name, e)
                    zipf.writestr(f"{fname}.dot", dot_src)
        with open(zip_path, "rb") as f:
            return f.read()
