# config.py
"""
Reference tables used while summarizing declarations.

The tables are read-only; a SummarizerConfig can be built with different
tables (tests do this) and handed to the composer or resolver.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# One-line explanations for argument-less attributes, keyed by literal attribute text.
# https://docs.swift.org/swift-book/documentation/the-swift-programming-language/attributes/
ATTRIBUTE_EXPLANATIONS: Mapping[str, str] = MappingProxyType({
    "@main": "Indicates the top-level entry point for program flow",
    "@discardableResult": "Suppresses the compiler warning when the function's return value is not used",
    "@inlinable": "Exposes the function's implementation as part of the module's public interface so it can be inlined by clients",
    "@inline(__always)": "Asks the compiler to always inline the function",
    "@usableFromInline": "Allows the function to be used in inlinable code even though it is not public",
    "@objc": "Makes the function available to Objective-C code",
    "@nonobjc": "Hides the function from Objective-C even if it would otherwise be exposed",
    "@MainActor": "Requires the function to run on the main actor",
    "@Sendable": "Marks the function as safe to pass across concurrency domains",
    "@IBAction": "Connects the function to an action in Interface Builder",
    "@IBSegueAction": "Connects the function to a segue action in Interface Builder",
    "@GKInspectable": "Exposes the function to the GameplayKit editor",
    "@NSManaged": "Indicates that Core Data provides the implementation at runtime",
    "@dynamicCallable": "Lets instances be called like functions",
    "@frozen": "Promises that the declaration will not change in future library versions",
    "@testable": "Gives tests access to internal declarations",
    "@warn_unqualified_access": "Warns when the function is called without a qualifying type or instance",
    "@preconcurrency": "Suppresses strict concurrency checking for the declaration",
    "@backDeployed": "Makes the function available on platform versions older than the one it first shipped in",
    "@_disfavoredOverload": "Makes the compiler prefer other overloads over this function",
    "@resultBuilder": "Lets the function build a result from a sequence of statements",
})

# How declaration modifiers are spoken. Modifiers not listed are spoken as written.
MODIFIER_WORDS: Mapping[str, str] = MappingProxyType({
    "fileprivate": "file-private",
    "nonisolated": "non-isolated",
    "nonmutating": "non-mutating",
    "__consuming": "consuming",
})


@dataclass(frozen=True)
class SummarizerConfig:
    attribute_explanations: Mapping[str, str] = field(default_factory=lambda: ATTRIBUTE_EXPLANATIONS)
    modifier_words: Mapping[str, str] = field(default_factory=lambda: MODIFIER_WORDS)

    def __post_init__(self):
        # keep caller-supplied dicts from being mutated through the config
        object.__setattr__(self, "attribute_explanations", MappingProxyType(dict(self.attribute_explanations)))
        object.__setattr__(self, "modifier_words", MappingProxyType(dict(self.modifier_words)))


DEFAULT_CONFIG = SummarizerConfig()
