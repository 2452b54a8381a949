"""
openapi-sorbet: generate Sorbet-typed Ruby classes from OpenAPI schemas.
"""

from .codegen.core.generator import get_version

__version__ = get_version()

__all__ = ["__version__"]
