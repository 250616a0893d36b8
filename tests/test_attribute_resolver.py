from attribute_resolver import AttributeResolver
from models import AttributeUse, AvailabilitySpec, Footnote, ObjCSelector, RawArgument


def test_availability_is_a_description():
    attr = AttributeUse("available", AvailabilitySpec((("macOS", "13.0"),)))
    assert AttributeResolver().resolve(attr) == ("available on macOS 13.0", None)


def test_availability_lists_every_platform():
    attr = AttributeUse("available", AvailabilitySpec((("iOS", "15"), ("macOS", "12"))))
    description, _ = AttributeResolver().resolve(attr)
    assert description == "available on iOS 15 and macOS 12"


def test_objc_selector():
    attr = AttributeUse("objc", ObjCSelector("doThing:"))
    assert AttributeResolver().resolve(attr) == ("exposed to Objective-C", None)


def test_argumentless_attribute_gets_footnote():
    description, footnote = AttributeResolver().resolve(AttributeUse("main"))
    assert description is None
    assert footnote == Footnote("@main", "Indicates the top-level entry point for program flow")


def test_fixed_argument_attribute_in_table():
    _, footnote = AttributeResolver().resolve(AttributeUse("inline", RawArgument("__always")))
    assert footnote.anchor_text == "@inline(__always)"


def test_unknown_attributes_are_ignored():
    resolver = AttributeResolver()
    assert resolver.resolve(AttributeUse("myWrapper")) == (None, None)
    assert resolver.resolve(AttributeUse("available", RawArgument("*, deprecated"))) == (None, None)
    assert resolver.resolve(AttributeUse("specialize", RawArgument("where T == Int"))) == (None, None)


def test_injected_table():
    resolver = AttributeResolver({"@custom": "Does custom things"})
    assert resolver.resolve(AttributeUse("custom")) == (None, Footnote("@custom", "Does custom things"))
    assert resolver.resolve(AttributeUse("main")) == (None, None)
