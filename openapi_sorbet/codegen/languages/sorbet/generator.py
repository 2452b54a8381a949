"""
Sorbet code generator implementation.

Renders resolved types as Ruby classes with Sorbet signatures:
``T::Struct`` for objects, ``T::Enum`` for string enums and
``T.type_alias`` for everything else. One file per type.
"""

from typing import Dict, List, Any, Optional
from pathlib import Path

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.naming import NameNormalizer
from ...core.types import Metadata, Property, Type
from .naming import create_ruby_normalizer, is_ruby_constant

logger = get_logger(__name__)

TEMPLATE_NAME = "class.rb.j2"


class SorbetGenerator(CodeGenerator):
    """Code generator for Sorbet-typed Ruby classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Sorbet generator with configuration."""
        super().__init__(config)

        self._normalizer = create_ruby_normalizer()
        self.typed_sigil = self.config.custom.get("typed_sigil", "strict")
        self.pad = " " * self.config.indent_size

    def get_template_directory(self) -> Optional[Path]:
        """Return the Sorbet templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "sorbet"

    @property
    def normalizer(self) -> NameNormalizer:
        return self._normalizer

    def generate_single_type(self, type_record: Type, metadata: Metadata) -> str:
        """Render one type into a complete Ruby file."""
        if not self.template_exists(TEMPLATE_NAME):
            raise GeneratorError(f"{TEMPLATE_NAME} template not found")

        context = {
            "type": type_record,
            "metadata": metadata,
            "typed_sigil": self.typed_sigil,
            "pad": self.pad,
            "comment": type_record.comment if self.config.add_comments else "",
            "properties": [self._property_data(p) for p in type_record.properties],
            "additional_properties": self._additional_properties_type(type_record),
            "alias_target": self._alias_target(type_record),
        }

        return self.render_template(TEMPLATE_NAME, context)

    def _property_data(self, prop: Property) -> Dict[str, Any]:
        """Template data for one `const` line."""
        return {
            "name": prop.name,
            "definition": self.property_definition(prop),
        }

    def property_type(self, prop: Property) -> str:
        """Sorbet type of a struct member: ``T.nilable(T::Array[Pet])``."""
        type_expr = prop.type
        if prop.is_array:
            type_expr = f"T::Array[{type_expr}]"
        if not prop.required:
            type_expr = f"T.nilable({type_expr})"
        return type_expr

    def property_definition(self, prop: Property) -> str:
        """The full `const` declaration for a struct member."""
        definition = f"const :{prop.name}, {self.property_type(prop)}"
        if prop.is_renamed:
            escaped = prop.schema_name.replace("\\", "\\\\").replace("'", "\\'")
            definition += f", name: '{escaped}'"
        return definition

    def _additional_properties_type(self, type_record: Type) -> Optional[str]:
        if not type_record.is_object() or not type_record.additional_properties:
            return None
        return f"T::Hash[String, {type_record.additional_properties}]"

    def _alias_target(self, type_record: Type) -> str:
        if type_record.is_array:
            element = (
                type_record.alias
                or type_record.additional_properties
                or self.config.untyped_type
            )
            return f"T::Array[{element}]"
        return type_record.alias or self.config.untyped_type

    def validate_types(self, types: List[Type]) -> List[str]:
        """Warn about names Ruby will not accept as constants."""
        warnings = []

        for t in types:
            if not is_ruby_constant(t.type_name):
                warnings.append(f"Type name {t.type_name!r} is not a valid Ruby constant")
            for literal in t.enum:
                if not is_ruby_constant(literal.name):
                    warnings.append(
                        f"Enum value {literal.value!r} of {t.type_name} maps to "
                        f"{literal.name!r}, which is not a valid Ruby constant"
                    )

        return warnings


# Factory functions
def create_sorbet_generator(config: Optional[Dict[str, Any]] = None) -> SorbetGenerator:
    """Create a Sorbet generator, applying overrides on top of the defaults."""
    from ...core.config import load_config

    return SorbetGenerator(load_config("sorbet", custom_config=config))
