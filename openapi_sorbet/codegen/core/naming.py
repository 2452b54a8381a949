"""
Naming utilities for safe code generation.

Turns arbitrary schema identifiers (schema names, property names, enum
literals) into type names, file slugs and member names. Every conversion
is a pure function of its input so that references to a schema always
normalize to the same name as the schema itself.
"""

import re
from typing import Set, Optional
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    PASCAL_CASE = "pascal"  # UserName


# Returned when nothing usable survives cleanup
FALLBACK_NAME = "value"


class NameNormalizer:
    """Handles name cleanup and case conversion."""

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        builtin_types: Optional[Set[str]] = None,
        suffix_on_conflict: str = "_",
    ):
        """
        Initialize name normalizer.

        Args:
            reserved_words: Language keywords that may not be used as member names
            builtin_types: Builtin type names that generated types must not shadow
            suffix_on_conflict: Suffix appended to a name that hits either set
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self.suffix_on_conflict = suffix_on_conflict

    def normalize(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE) -> str:
        """
        Normalize a name into the requested case style.

        Never raises: input with no usable characters yields ``FALLBACK_NAME``
        converted to the target case.
        """
        cleaned = self._clean_basic(str(name))
        return self._convert_case(cleaned, target_case) or self._convert_case(
            FALLBACK_NAME, target_case
        )

    def type_name(self, name: str) -> str:
        """Type form: ``pet_status`` -> ``PetStatus``."""
        converted = self.normalize(name, NamingCase.PASCAL_CASE)
        if converted[0].isdigit():
            converted = f"Type{converted}"
        if converted in self.builtin_types:
            converted = f"{converted}{self.suffix_on_conflict}"
        return converted

    def file_slug(self, name: str) -> str:
        """File-slug form: ``PetStatus`` -> ``pet_status``."""
        return self.normalize(name, NamingCase.SNAKE_CASE)

    def property_name(self, name: str) -> str:
        """Property form: ``createdAt`` -> ``created_at``."""
        converted = self.normalize(name, NamingCase.SNAKE_CASE)
        if converted[0].isdigit():
            converted = f"_{converted}"
        if converted in self.reserved_words:
            converted = f"{converted}{self.suffix_on_conflict}"
        return converted

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - replace invalid characters."""
        # Anything outside ASCII letters, digits, underscore and hyphen
        # becomes a word separator
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name)
        return cleaned.strip("_-")

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        if target_case == NamingCase.PASCAL_CASE:
            return self._to_pascal_case(name)
        return self._to_snake_case(name)

    def _to_snake_case(self, name: str) -> str:
        """Convert to snake_case."""
        name = name.replace("-", "_")

        # Split acronym runs from a following word: HTTPServer -> HTTP_Server
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
        # Insert underscore before uppercase letters
        name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)

        name = name.lower()
        name = re.sub(r"_+", "_", name)

        return name.strip("_")

    def _to_pascal_case(self, name: str) -> str:
        """Convert to PascalCase."""
        snake = self._to_snake_case(name)
        parts = snake.split("_")

        return "".join(part.capitalize() for part in parts if part)


_default_normalizer: Optional[NameNormalizer] = None


def get_default_normalizer() -> NameNormalizer:
    """Normalizer without any reserved words."""
    global _default_normalizer
    if _default_normalizer is None:
        _default_normalizer = NameNormalizer()
    return _default_normalizer

