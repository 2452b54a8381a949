"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union, get_origin
from dataclasses import dataclass, field, fields


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_dir: str = "out"
    module: str = ""  # e.g. "Acme::Models"; empty means no enclosing module
    file_extension: str = ".rb"

    # Type vocabulary used by the resolver
    string_type: str = "String"
    integer_type: str = "Integer"
    boolean_type: str = "T::Boolean"
    untyped_type: str = "T.untyped"
    struct_base_class: str = "T::Struct"

    # Inline objects become `<parent><separator><property>` before normalizing
    nested_name_separator: str = "_"

    # Additional metadata
    add_comments: bool = True
    indent_size: int = 2

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["sorbet"] = {
            "file_extension": ".rb",
            "string_type": "String",
            "integer_type": "Integer",
            "boolean_type": "T::Boolean",
            "untyped_type": "T.untyped",
            "struct_base_class": "T::Struct",
            "add_comments": True,
            "indent_size": 2,
            "custom": {
                "typed_sigil": "strict",
            },
        }

    def get_config(
        self,
        language: str = "sorbet",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = dict(self._configs.get(language, {}))
        base_config["custom"] = dict(base_config.get("custom", {}))

        # Load from file if provided
        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        # Apply custom overrides
        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]):
        """Merge overrides into base; `custom` dicts are merged key by key."""
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        self._check_types(config_args)

        # Unknown keys end up in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def _check_types(self, config_args: Dict[str, Any]):
        """Raise ConfigError when a known setting has the wrong JSON type."""
        for f in fields(GeneratorConfig):
            if f.name not in config_args:
                continue

            value = config_args[f.name]
            expected = get_origin(f.type) or f.type

            # bool is an int subclass; `"indent_size": true` is still wrong
            if not isinstance(value, expected) or (
                expected is not bool and isinstance(value, bool)
            ):
                raise ConfigError(
                    f"Invalid value for {f.name}: expected {expected.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.file_extension.startswith("."):
            warnings.append(
                f"file_extension should start with a dot: {config.file_extension}"
            )

        if config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if not config.nested_name_separator:
            warnings.append(
                "nested_name_separator is empty; nested type names may collide"
            )

        for segment in parse_modules(config.module):
            if not segment[:1].isalpha():
                warnings.append(f"Invalid module segment: {segment!r}")

        return warnings


def parse_modules(module: str) -> list[str]:
    """Split ``Acme::Models`` into ``["Acme", "Models"]``; empty gives ``[]``."""
    if not module:
        return []
    return [segment.strip() for segment in module.split("::") if segment.strip()]


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "sorbet",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)

