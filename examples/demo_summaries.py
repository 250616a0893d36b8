import sys, os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from decl_parser import parse_declarations
from render import highlight_declaration, render_plain
from signature_composer import compose_all

code = """
@available(macOS 13.0, *) public func foo<T: Numeric>(name: T, values: Int..., age: Int = 30) async throws -> String?

func authenticateUser(method: (String) throws -> Bool) rethrows

func tableView(
    _ tableView: UITableView,
    cellForRowAt indexPath: IndexPath
) -> UITableViewCell

func snapshot(for configuration: ConfigurationAppIntent, in context: Context) async -> SimpleEntry

func reduce<T>(
    _ initialResult: T,
    _ nextPartialResult: @escaping (T, Self.Output) -> T
) -> Publishers.Reduce<Self, T>

private func getAs<T: AnyObject>(_ objectType: T.Type) -> T?

@main
func foo<T: Codable, R: Codable>(_ bar: inout [T]) -> R
"""

signatures = parse_declarations(code)
translations = compose_all(signatures)

for sig in signatures:
    print(highlight_declaration(sig))
print()
print(render_plain(translations))
