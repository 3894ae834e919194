"""
qobject-bindgen Code Generation Module

Generates C++ QObject classes from a structured bridge description.
"""

from .registry import FeatureRegistry, RegistryError, get_registry
from .core.generator import GenerationResult, GeneratorError, generate_code
from .core.model import ParsedModel
from .core.config import GeneratorConfig, ConfigManager, load_config
from .cpp import GeneratedCppBlocks, CppWriter


def generate_from_dict(data, config=None, source="<bridge>"):
    """
    Generate C++ from a decoded bridge description.

    Args:
        data: Bridge description as produced by the front end
        config: Generator configuration dict, path or GeneratorConfig
        source: Name used in diagnostics

    Returns:
        GenerationResult with header and source text
    """
    if isinstance(config, GeneratorConfig):
        final_config = config
    elif isinstance(config, dict):
        final_config = load_config(custom_config=config)
    elif config is None:
        final_config = load_config()
    else:
        final_config = load_config(config_file=config)

    try:
        model = ParsedModel.from_dict(data, source)
    except GeneratorError as e:
        return GenerationResult.error(f"Invalid bridge description: {e}", exception=e)

    return generate_code(model, final_config)


# Export main interfaces
__all__ = [
    "FeatureRegistry",
    "RegistryError",
    "get_registry",
    "GenerationResult",
    "GeneratorError",
    "generate_code",
    "ParsedModel",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "GeneratedCppBlocks",
    "CppWriter",
    "generate_from_dict",
]
