"""
Ruby-specific naming utilities.

Handles Ruby keywords and the core classes generated constants must not
shadow.
"""

from ...core.naming import NameNormalizer


# Ruby keywords; `const :end, ...` works but the generated reader does not
RUBY_RESERVED_WORDS = {
    "__method__",
    "alias",
    "and",
    "begin",
    "break",
    "case",
    "class",
    "def",
    "defined?",
    "do",
    "else",
    "elsif",
    "end",
    "ensure",
    "false",
    "for",
    "if",
    "in",
    "module",
    "next",
    "nil",
    "not",
    "or",
    "redo",
    "rescue",
    "retry",
    "return",
    "self",
    "super",
    "then",
    "true",
    "undef",
    "unless",
    "until",
    "when",
    "while",
    "yield",
}

# Constants a generated type would shadow inside its module
RUBY_BUILTIN_TYPES = {
    "Array",
    "BasicObject",
    "Class",
    "Comparable",
    "Float",
    "Hash",
    "Integer",
    "Kernel",
    "Module",
    "Object",
    "String",
    "Struct",
    "Symbol",
    "T",
    "Time",
}


def create_ruby_normalizer() -> NameNormalizer:
    """Create a name normalizer configured for Ruby."""
    return NameNormalizer(RUBY_RESERVED_WORDS, RUBY_BUILTIN_TYPES)


def is_ruby_constant(name: str) -> bool:
    """True when ``name`` can be used as a Ruby constant."""
    return bool(name) and name[0].isupper() and name.replace("_", "a").isalnum()
