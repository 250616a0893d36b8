import pytest

from decl_parser import DeclarationSyntaxError, parse_declaration, parse_declarations
from models import (
    ArrayType,
    AttributedType,
    AvailabilitySpec,
    DictionaryType,
    FunctionType,
    GenericConstraint,
    ImplicitlyUnwrappedOptionalType,
    MetatypeType,
    NamedType,
    ObjCSelector,
    OpaqueType,
    OptionalType,
    PackExpansionType,
    PackReferenceType,
    ThrowKind,
    TupleType,
)
from signature_composer import compose


def summary(source):
    return compose(parse_declaration(source)).text


def test_full_featured_declaration():
    sig = parse_declaration(
        "@available(macOS 13.0, *) public func foo<T: Numeric>(name: T, values: Int..., age: Int = 30) async throws -> String?"
    )
    assert sig.name == "foo"
    assert sig.is_async
    assert sig.throw_kind is ThrowKind.THROWS
    assert sig.modifiers == ("public",)
    assert sig.generics == (GenericConstraint("T", "Numeric"),)
    assert sig.attributes[0].argument == AvailabilitySpec((("macOS", "13.0"),))
    assert sig.parameters[1].is_variadic
    assert sig.parameters[2].default_value == "30"
    assert sig.return_type == OptionalType(NamedType("String"))
    assert compose(sig).text == (
        "Asynchronous public function named `foo` takes inputs `name` of type `T`, "
        "an indefinite number of `values` of type `Int`, and `age` of type `Int` with default value of `30` "
        "and returns output of `String` or `nil`, where `T` conforms to `Numeric`, or throws an error. "
        "It is available on macOS 13.0."
    )


def test_rethrows_with_function_parameter():
    sig = parse_declaration("func authenticateUser(method: (String) throws -> Bool) rethrows")
    assert sig.throw_kind is ThrowKind.RETHROWS
    assert sig.parameters[0].type == FunctionType((NamedType("String"),), NamedType("Bool"), ThrowKind.THROWS)
    assert compose(sig).text == (
        "Function named `authenticateUser` takes input `method` of type unary throwing function that returns `Bool` "
        "and returns no output or throws an error if its input function throws an error."
    )


def test_escaping_closure_and_member_types():
    sig = parse_declaration(
        "func reduce<T>(_ initialResult: T, _ nextPartialResult: @escaping (T, Self.Output) -> T) -> Publishers.Reduce<Self, T>"
    )
    closure = sig.parameters[1].type
    assert isinstance(closure, AttributedType)
    assert closure.is_escaping
    assert sig.return_type == NamedType("Publishers.Reduce", (NamedType("Self"), NamedType("T")))
    assert compose(sig).text == (
        "Function named `reduce` takes inputs `initialResult` of type `T` and `nextPartialResult` of type "
        "`(T, Self.Output) -> T` escaping closure and returns output of `Publishers.Reduce<Self, T>`, "
        "where `T` can be any type."
    )


def test_metatype_parameter():
    sig = parse_declaration("private func getAs<T: AnyObject>(_ objectType: T.Type) -> T?")
    assert sig.parameters[0].type == MetatypeType("T.Type")
    assert sig.parameters[0].external_name == "_"
    assert summary("private func getAs<T: AnyObject>(_ objectType: T.Type) -> T?") == (
        "Private function named `getAs` takes input `objectType` of type `T.Type` "
        "and returns output of `T` or `nil`, where `T` conforms to `AnyObject`."
    )


def test_main_attribute_and_inout():
    translation = compose(parse_declaration("@main\nfunc foo<T: Codable, R: Codable>(_ bar: inout [T]) -> R"))
    assert translation.text == (
        "Function named `foo` takes input a non-constant `bar` of type array of `T` and returns output of `R`, "
        "where `T` conforms to `Codable` and `R` conforms to `Codable`."
    )
    assert translation.footnotes[-1].anchor_text == "@main"


def test_functions_inside_type_bodies():
    source = """
    class Cache {
        static func make() -> Cache { Cache() }
        private var store: [String: Int] = [:]
        func get(_ key: String) -> Int? {
            func helper() {}
            return store[key]
        }
    }
    """
    signatures = parse_declarations(source)
    assert [s.name for s in signatures] == ["make", "get"]
    assert signatures[0].modifiers == ("static",)


def test_source_excludes_body():
    sig = parse_declaration("func foo(n: Int) -> Int { n * 2 }")
    assert sig.source == "func foo(n: Int) -> Int"


def test_where_clause():
    sig = parse_declaration("func f<C>(c: C) where C: Collection, C.Element == Int {}")
    assert sig.generics == (
        GenericConstraint("C", "Collection"),
        GenericConstraint("C.Element", same_type="Int"),
    )
    assert compose(sig).text.endswith(
        "where `C` conforms to `Collection` and `C.Element` is the same type as `Int`."
    )


def test_objc_selector():
    sig = parse_declaration("@objc(doThing:) func doThing(_ x: Int)")
    assert sig.attributes[0].argument == ObjCSelector("doThing:")
    assert compose(sig).text.endswith(". It is exposed to Objective-C.")


def test_long_form_availability():
    sig = parse_declaration("@available(iOS, introduced: 15.0) func x()")
    assert sig.attributes[0].argument == AvailabilitySpec((("iOS", "15.0"),))
    assert compose(sig).text == "Function named `x` takes no inputs and returns no output. It is available on iOS 15.0."


def test_malformed_declarations():
    with pytest.raises(DeclarationSyntaxError):
        parse_declaration("func (x: Int)")
    with pytest.raises(DeclarationSyntaxError):
        parse_declaration("func foo(x Int)")


def test_parse_declaration_requires_exactly_one():
    with pytest.raises(DeclarationSyntaxError):
        parse_declaration("func a()\nfunc b()")
    with pytest.raises(DeclarationSyntaxError):
        parse_declaration("let x = 1")


def test_operator_function():
    sig = parse_declaration("static func == (lhs: Point, rhs: Point) -> Bool")
    assert sig.name == "=="
    assert len(sig.parameters) == 2


def test_collection_and_optional_types():
    sig = parse_declaration("func f(a: [String: Int], b: (Int, String)?, c: Int!)")
    a, b, c = (p.type for p in sig.parameters)
    assert a == DictionaryType(NamedType("String"), NamedType("Int"))
    assert b == OptionalType(TupleType((NamedType("Int"), NamedType("String"))))
    assert c == ImplicitlyUnwrappedOptionalType(NamedType("Int"))
    assert sig.parameters[0].type != ArrayType(NamedType("String"))


def test_opaque_return():
    sig = parse_declaration("func body() -> some View")
    assert sig.return_type == OpaqueType("some", NamedType("View"))
    assert compose(sig).footnotes[0].text == "Returns opaque `View`"


def test_parameter_pack():
    sig = parse_declaration("func f<each T>(_ values: repeat each T)")
    assert sig.generics == (GenericConstraint("T"),)
    assert sig.parameters[0].type == PackExpansionType(PackReferenceType(NamedType("T")))


def test_suppressed_conformance_and_ownership():
    sig = parse_declaration("func consume<T: ~Copyable>(_ value: consuming T)")
    assert sig.generics == (GenericConstraint("T", "~Copyable"),)
    assert sig.parameters[0].local_name == "value"
    assert sig.parameters[0].type == NamedType("T")
    assert not sig.parameters[0].is_inout


def test_unparseable_declaration_is_skipped():
    signatures = parse_declarations("func a() -> Int\nfunc b(x: ) -> Int\nfunc c(n: Int)")
    names = [s.name for s in signatures]
    assert "a" in names
    assert "c" in names
    assert names.index("a") < names.index("c")


def test_skipped_declarations_are_logged(caplog):
    with caplog.at_level("WARNING", logger="decl_parser"):
        parse_declarations("func a() -> Int\nfunc b(x: ) -> Int")
    assert "Skipping unparseable declaration" in caplog.text


def test_comments_and_strings_are_ignored():
    source = """
    // func commented() {}
    /* func blocked() {} */
    func f() { let s = "}" }
    func g(x: Int = max(1, 2), y: Int) {}
    """
    signatures = parse_declarations(source)
    assert [s.name for s in signatures] == ["f", "g"]
    assert signatures[1].parameters[0].default_value == "max(1, 2)"
