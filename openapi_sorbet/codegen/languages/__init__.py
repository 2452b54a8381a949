"""
Language-specific code generators.

This module contains generators for different target languages.
"""

from .sorbet import SorbetGenerator, create_sorbet_generator

__all__ = ["SorbetGenerator", "create_sorbet_generator"]
