"""
Sorbet code generator module.

Generates Ruby `T::Struct`, `T::Enum` and `T.type_alias` declarations
from OpenAPI component schemas.
"""

from .generator import SorbetGenerator, create_sorbet_generator
from .naming import (
    RUBY_BUILTIN_TYPES,
    RUBY_RESERVED_WORDS,
    create_ruby_normalizer,
    is_ruby_constant,
)

__all__ = [
    "SorbetGenerator",
    "create_sorbet_generator",
    # Naming
    "RUBY_BUILTIN_TYPES",
    "RUBY_RESERVED_WORDS",
    "create_ruby_normalizer",
    "is_ruby_constant",
]
