"""
qobject-bindgen: C++ QObject classes for Rust business objects.

Typical use::

    from qobject_bindgen import generate_from_file

    result = generate_from_file("bridge.json")
    if result.success:
        print(result.header)
"""

__version__ = "0.1.0"

from .codegen import GenerationResult, generate_from_dict  # noqa: E402
from .utils import load_bridge  # noqa: E402


def generate_from_file(file_path, config=None):
    """
    Load a bridge description from a JSON file and generate C++ for it.

    Args:
        file_path: Path to the bridge description
        config: Generator configuration dict, path or GeneratorConfig

    Returns:
        GenerationResult with header and source text
    """
    source, data = load_bridge(file_path)
    return generate_from_dict(data, config, source)


__all__ = [
    "__version__",
    "GenerationResult",
    "generate_from_dict",
    "generate_from_file",
]
