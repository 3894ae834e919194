"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import copy
import json
from pathlib import Path
from typing import Dict, Any, List, Optional, Union
from dataclasses import dataclass, field, fields, asdict


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


DEFAULT_FEATURES = ["property", "method", "signal", "inherit", "qenum"]


@dataclass
class GeneratorConfig:
    """Configuration for the C++ generator."""

    # Output settings
    output_dir: Optional[str] = None
    header_suffix: str = ".cxxqt.h"
    source_suffix: str = ".cxxqt.cpp"

    # The CXX bridge header declaring the business-logic entry points
    include_cxx_header: bool = True
    cxx_header_suffix: str = ".cxx.h"

    # Naming of generated helper namespaces
    internals_prefix: str = "cxx_qt_"
    extern_namespace_internals: str = "rust::cxxqtgen1"

    # Objects that do not name a base class derive from this one
    default_base_class: str = "QObject"

    # Code style settings
    indent_size: int = 2
    add_comments: bool = True

    # Custom templates overriding the built-in header/source templates
    template_dir: Optional[str] = None

    # Sibling feature generators, in invocation order
    features: List[str] = field(default_factory=lambda: list(DEFAULT_FEATURES))

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(GeneratorConfig())

    def get_config(self, custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = copy.deepcopy(self._defaults)

        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
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

        if custom_args:
            existing_custom = dict(config_args.get('custom') or {})
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        try:
            return GeneratorConfig(**config_args)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        for suffix_name in ("header_suffix", "source_suffix", "cxx_header_suffix"):
            suffix = getattr(config, suffix_name)
            if not suffix.startswith("."):
                warnings.append(f"{suffix_name} should start with '.': {suffix}")

        if config.header_suffix == config.source_suffix:
            warnings.append("header_suffix and source_suffix are identical")

        if not config.default_base_class:
            warnings.append("default_base_class is empty")

        for part in config.extern_namespace_internals.split("::"):
            if not part.isidentifier():
                warnings.append(
                    f"Invalid extern_namespace_internals: {config.extern_namespace_internals}"
                )
                break

        if config.internals_prefix and not config.internals_prefix.isidentifier():
            warnings.append(f"Invalid internals_prefix: {config.internals_prefix}")

        if len(set(config.features)) != len(config.features):
            warnings.append("features lists a generator more than once")

        if config.template_dir and not Path(config.template_dir).is_dir():
            warnings.append(f"template_dir does not exist: {config.template_dir}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)

