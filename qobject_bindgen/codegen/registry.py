"""
Feature registry for the per-object generators.

Provides registration and ordered instantiation of the sibling feature
generators (properties, methods, signals, ...) run for every object.
"""

from typing import Dict, Type, Optional, Any, List
from .core.generator import FeatureGenerator
from .core.config import GeneratorConfig


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class FeatureRegistry:
    """Registry for managing available feature generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[FeatureGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        feature: str,
        generator_class: Type[FeatureGenerator],
        aliases: Optional[List[str]] = None,
    ):
        """
        Register a generator for a feature.

        Args:
            feature: Primary feature name (e.g., 'property', 'signal')
            generator_class: Generator class implementing FeatureGenerator
            aliases: Alternative names accepted in ``config.features``

        Raises:
            RegistryError: If generator class is invalid
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, FeatureGenerator
        ):
            raise RegistryError("Generator class must inherit from FeatureGenerator")

        feature_key = feature.lower()
        self._generators[feature_key] = generator_class
        for alias in aliases or []:
            self._aliases[alias.lower()] = feature_key

    def get_generator_class(self, feature: str) -> Type[FeatureGenerator]:
        """
        Get generator class for a feature.

        Args:
            feature: Feature name or alias

        Returns:
            Generator class

        Raises:
            RegistryError: If feature not found
        """
        feature_key = feature.lower()

        if feature_key in self._generators:
            return self._generators[feature_key]

        if feature_key in self._aliases:
            return self._generators[self._aliases[feature_key]]

        available = self.list_features()
        raise RegistryError(
            f"No generator registered for feature: {feature}. "
            f"Available: {', '.join(available)}"
        )

    def create_generator(self, feature: str) -> FeatureGenerator:
        """Create a generator instance for a feature."""
        return self.get_generator_class(feature)()

    def generators_for(self, config: GeneratorConfig) -> List[FeatureGenerator]:
        """
        Instantiate the generators a configuration enables, in its order.

        Raises:
            RegistryError: If the configuration names an unknown feature
        """
        return [self.create_generator(feature) for feature in config.features]

    def list_features(self) -> List[str]:
        """Get list of registered primary feature names."""
        return sorted(self._generators.keys())

    def get_feature_info(self, feature: str) -> Dict[str, Any]:
        """
        Get information about a registered feature.

        Raises:
            RegistryError: If feature not found
        """
        generator_class = self.get_generator_class(feature)

        feature_key = feature.lower()
        if feature_key in self._aliases:
            feature_key = self._aliases[feature_key]

        generator = generator_class()

        return {
            "name": generator.feature_name,
            "class": generator_class.__name__,
            "description": generator.description,
            "aliases": sorted(
                alias for alias, target in self._aliases.items() if target == feature_key
            ),
            "module": generator_class.__module__,
        }


# Global registry instance - created once
_global_registry: Optional[FeatureRegistry] = None


def get_registry() -> FeatureRegistry:
    """Get the global feature registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = FeatureRegistry()
        _auto_register_features(_global_registry)
    return _global_registry


def _auto_register_features(registry: FeatureRegistry):
    """
    Register the built-in feature generators.

    This is the single source of truth for feature registration.
    """
    from .cpp.property import PropertyGenerator
    from .cpp.method import MethodGenerator
    from .cpp.signal import SignalGenerator
    from .cpp.inherit import InheritGenerator
    from .cpp.qenum import QEnumGenerator

    registry.register("property", PropertyGenerator, aliases=["properties", "qproperty"])
    registry.register("method", MethodGenerator, aliases=["methods", "invokable"])
    registry.register("signal", SignalGenerator, aliases=["signals", "qsignal"])
    registry.register("inherit", InheritGenerator, aliases=["inherited"])
    registry.register("qenum", QEnumGenerator, aliases=["enum", "enums"])

