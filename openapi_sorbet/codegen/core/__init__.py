"""
Core code generation components.

Provides the schema view, type resolution and base classes used by all
language generators.
"""

from .generator import (
    CodeGenerator,
    GeneratorError,
    GenerationResult,
    build_metadata,
    generate_code,
    get_version,
    write_result,
)
from .schema import DocumentError, OpenAPIDocument, SchemaNode, SchemaType
from .types import Enum, Metadata, Property, Type
from .resolver import Diagnostic, Diagnostics, TypeResolver, resolve_types
from .naming import NameNormalizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "build_metadata",
    "generate_code",
    "get_version",
    "write_result",
    # Schema view
    "DocumentError",
    "OpenAPIDocument",
    "SchemaNode",
    "SchemaType",
    # Intermediate type model
    "Enum",
    "Metadata",
    "Property",
    "Type",
    # Resolution
    "Diagnostic",
    "Diagnostics",
    "TypeResolver",
    "resolve_types",
    # Naming utilities - language-agnostic
    "NameNormalizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system - language-agnostic
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
