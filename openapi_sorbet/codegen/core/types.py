"""
Intermediate type model.

The records produced by the resolver and consumed by the language
renderers. A ``Type`` is one emitted declaration: a struct, an alias or
an enum. Its shape is derived from which fields are populated.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Property:
    """A typed member of a struct-shaped type."""

    name: str
    schema_name: str  # Original JSON key, kept for wire-name fidelity
    type: str
    required: bool = False
    is_array: bool = False  # `type` is the element type

    @property
    def is_renamed(self) -> bool:
        """True when the member name differs from the wire name."""
        return self.name != self.schema_name


@dataclass
class Enum:
    """One literal of an enum-shaped type."""

    name: str
    value: str


@dataclass
class Type:
    """One emitted declaration."""

    schema_name: str
    type_name: str
    filename: str
    comment: str = ""

    # Struct shape
    base_class: str = ""
    properties: List[Property] = field(default_factory=list)

    # Alias shape
    alias: str = ""
    is_array: bool = False

    # Enum shape
    enum: List[Enum] = field(default_factory=list)

    # Open map value type for structs, untyped element marker for arrays
    additional_properties: Optional[str] = None

    def is_object(self) -> bool:
        return bool(self.base_class)

    def is_enum(self) -> bool:
        return not self.is_object() and len(self.enum) > 0

    def is_alias(self) -> bool:
        return not self.is_object() and not self.is_enum()

    def get_property(self, name: str) -> Optional[Property]:
        """Get property by normalized name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass
class Metadata:
    """Run-level information rendered into every generated file."""

    command: str
    version: str
    modules: List[str] = field(default_factory=list)
    spec_title: str = ""
    spec_version: str = ""
