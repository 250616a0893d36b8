import sys, os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import networkx as nx
from decl_parser import parse_declaration
from type_graph import build_type_graph, dot_for_signature

sig = parse_declaration(
    "func merge(_ groups: [[String: Int]], using combine: @escaping (Int, Int) throws -> Int) rethrows -> [String: Int]?"
)

graph = build_type_graph(sig)

print("Nodes:")
for n, d in graph.nodes(data=True):
    print(n, d)

print("\nEdges:")
for u, v, d in graph.edges(data=True):
    print(f"{u} -> {v} ({d['label']})")

print("\nDepth:", nx.dag_longest_path_length(graph))
print()
print(dot_for_signature(sig, name=sig.name))
