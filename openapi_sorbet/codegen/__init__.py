"""
OpenAPI Sorbet Code Generation Module

Generates typed model classes from OpenAPI component schemas.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    GenerationResult,
    GeneratorError,
    generate_code,
    write_result,
)
from .core.schema import DocumentError, OpenAPIDocument, SchemaNode
from .core.types import Enum, Metadata, Property, Type
from .core.resolver import Diagnostics, TypeResolver, resolve_types
from .core.config import GeneratorConfig, ConfigError, ConfigManager, load_config


# Convenience functions
def generate_from_document(document, language="sorbet", config=None, diagnostics=None):
    """
    Resolve and render a loaded document.

    Args:
        document: OpenAPIDocument to generate from
        language: Target language name
        config: Generator configuration (GeneratorConfig, dict or JSON path)
        diagnostics: Optional collector for recoverable problems

    Returns:
        GenerationResult with rendered files
    """
    generator = get_generator(language, config)
    return generate_code(generator, document, diagnostics)


def quick_generate(document_data, language="sorbet", **options):
    """
    Quick code generation from parsed OpenAPI data.

    Args:
        document_data: OpenAPI document as a dict
        language: Target language
        **options: Generator options

    Returns:
        Mapping of file name to generated source
    """
    document = OpenAPIDocument.from_dict(document_data)
    return generate_from_document(document, language, options).files


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "OpenAPIDocument",
    "DocumentError",
    "SchemaNode",
    "Type",
    "Property",
    "Enum",
    "Metadata",
    "Diagnostics",
    "TypeResolver",
    "GeneratorConfig",
    "ConfigError",
    "ConfigManager",
    "generate_code",
    "generate_from_document",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
    "load_config",
    "quick_generate",
    "resolve_types",
    "write_result",
]
