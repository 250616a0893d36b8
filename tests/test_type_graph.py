import io
import zipfile

from decl_parser import parse_declaration, parse_declarations
from type_graph import build_type_graph, dot_for_signature, graphs_zip


def test_graph_structure():
    graph = build_type_graph(parse_declaration("func f(a: [Int]) -> Int?"))
    assert graph.number_of_nodes() == 6
    assert graph.number_of_edges() == 5
    assert graph.out_degree("n1") == 2
    labels = {data["label"] for _, _, data in graph.edges(data=True)}
    assert {"input", "output", "element", "wrapped"} <= labels


def test_dot_source():
    dot = dot_for_signature(parse_declaration("func f(a: [Int]) -> Int?"), name="f")
    assert dot.startswith('digraph "f" {')
    assert 'label="func f"' in dot
    assert dot.rstrip().endswith("}")


def test_graphs_zip_has_one_entry_per_signature():
    data = graphs_zip(parse_declarations("func f(a: Int)\nfunc g() -> [String]"))
    names = zipfile.ZipFile(io.BytesIO(data)).namelist()
    assert len(names) == 2
    assert names[0].startswith("00_f")
    assert all(n.endswith((".png", ".dot")) for n in names)
