from config import SummarizerConfig
from models import (
    ArrayType,
    AttributeUse,
    AvailabilitySpec,
    GenericConstraint,
    NamedType,
    OptionalType,
    Parameter,
    Signature,
    ThrowKind,
)
from signature_composer import SignatureComposer, compose, compose_all

INT = NamedType("Int")
T = NamedType("T")


def test_single_input_and_output():
    sig = Signature("foo", parameters=(Parameter("n", INT, external_name="n"),), return_type=INT)
    assert compose(sig).text == "Function named `foo` takes input `n` of type `Int` and returns output of `Int`."


def test_no_inputs_no_output():
    assert compose(Signature("bar")).text == "Function named `bar` takes no inputs and returns no output."


def test_variadic_input():
    sig = Signature("sum", parameters=(Parameter("values", INT, is_variadic=True),), return_type=INT)
    text = compose(sig).text
    assert "an indefinite number of `values` of type `Int`" in text
    assert "..." not in text


def test_rethrows():
    sig = Signature("retry", throw_kind=ThrowKind.RETHROWS)
    text = compose(sig).text
    assert text.endswith("or throws an error if its input function throws an error.")
    assert text.count("or throws an error") == 1


def test_throws():
    sig = Signature("load", throw_kind=ThrowKind.THROWS)
    assert compose(sig).text == "Function named `load` takes no inputs and returns no output or throws an error."


def test_optional_return_footnote():
    sig = Signature("name", return_type=OptionalType(NamedType("String")))
    translation = compose(sig)
    assert "returns output of `String` or `nil`" in translation.text
    assert translation.footnotes[0].anchor_text == "String?"
    assert translation.footnotes[0].text == "Returns `String` or nil"


def test_return_footnote_is_recursive():
    sig = Signature("grid", return_type=ArrayType(ArrayType(INT)))
    translation = compose(sig)
    assert "returns output of `[[Int]]`" in translation.text
    assert translation.footnotes[0].text == "Returns array of array of `Int`"


def test_plural_inputs():
    sig = Signature("add", parameters=(Parameter("a", INT), Parameter("b", INT)), return_type=INT)
    assert compose(sig).text == (
        "Function named `add` takes inputs `a` of type `Int` and `b` of type `Int` and returns output of `Int`."
    )


def test_async_and_modifiers():
    sig = Signature("load", is_async=True, modifiers=("public", "static"))
    assert compose(sig).text == (
        "Asynchronous public static function named `load` takes no inputs and returns no output."
    )


def test_modifier_words():
    assert compose(Signature("x", modifiers=("fileprivate",))).text.startswith("File-private function named `x`")


def test_generic_clause():
    sig = Signature(
        "foo",
        parameters=(Parameter("x", T),),
        return_type=T,
        generics=(GenericConstraint("T", "Numeric"),),
    )
    assert compose(sig).text == (
        "Function named `foo` takes input `x` of type `T` and returns output of `T`, where `T` conforms to `Numeric`."
    )


def test_generic_clause_before_throws():
    sig = Signature("foo", generics=(GenericConstraint("T"),), throw_kind=ThrowKind.THROWS)
    assert compose(sig).text == (
        "Function named `foo` takes no inputs and returns no output, where `T` can be any type, or throws an error."
    )


def test_same_type_requirement():
    sig = Signature("foo", generics=(GenericConstraint("C.Element", same_type="Int"),))
    assert "where `C.Element` is the same type as `Int`" in compose(sig).text


def test_attribute_sentence_after_generics():
    sig = Signature(
        "foo",
        generics=(GenericConstraint("T"),),
        attributes=(AttributeUse("available", AvailabilitySpec((("macOS", "13.0"),))),),
    )
    assert compose(sig).text == (
        "Function named `foo` takes no inputs and returns no output, where `T` can be any type. "
        "It is available on macOS 13.0."
    )


def test_footnote_order():
    sig = Signature(
        "main",
        parameters=(Parameter("bar", ArrayType(T), external_name="_", is_inout=True),),
        return_type=NamedType("R"),
        attributes=(AttributeUse("main"),),
    )
    notes = compose(sig).footnotes
    assert [n.anchor_text for n in notes] == ["R", "bar: [T]", "bar: [T]", "@main"]
    assert notes[-1].text == "Indicates the top-level entry point for program flow"


def test_injected_config():
    config = SummarizerConfig(attribute_explanations={"@main": "Entry point"}, modifier_words={"public": "exported"})
    sig = Signature("run", modifiers=("public",), attributes=(AttributeUse("main"),))
    translation = SignatureComposer(config).compose(sig)
    assert translation.text.startswith("Exported function named `run`")
    assert translation.footnotes[-1].text == "Entry point"


def test_deterministic_and_sentence_shaped():
    sig = Signature(
        "foo",
        parameters=(Parameter("n", INT), Parameter("values", INT, is_variadic=True)),
        return_type=OptionalType(INT),
        is_async=True,
        throw_kind=ThrowKind.THROWS,
    )
    first, second = compose_all([sig, sig])
    assert first == second
    assert first.text[0].isupper()
    assert first.text.endswith(".")
    assert not first.text.endswith("..")
