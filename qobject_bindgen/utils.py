"""Loading of bridge descriptions.

The parser front end writes one JSON document per bridge module. This
module reads such a document from a file, a URL or standard input and
checks its outer shape (a JSON object naming its ``cxx_file_stem``)
before the model layer converts the rest.
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

STDIN_SOURCE = "<stdin>"


class BridgeLoadError(Exception):
    """A bridge description could not be read or is not a bridge document."""

    pass


def _decode(text: str, source: str) -> dict[str, Any]:
    """Decode ``text`` and check that it looks like a bridge description."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in bridge description %s: %s", source, e)
        raise BridgeLoadError(f"Invalid JSON in {source}: {e}") from e

    if not isinstance(data, dict):
        logger.error("Bridge description %s is a %s", source, type(data).__name__)
        raise BridgeLoadError(
            f"{source} must hold a JSON object, not {type(data).__name__}"
        )
    if not isinstance(data.get("cxx_file_stem"), str):
        logger.error("Bridge description %s names no cxx_file_stem", source)
        raise BridgeLoadError(f"{source} is not a bridge description: no 'cxx_file_stem'")

    logger.info(
        "Loaded bridge '%s' from %s (%d objects)",
        data["cxx_file_stem"],
        source,
        len(data.get("qobjects") or []),
    )
    return data


def load_bridge_file(file_path: str | Path) -> tuple[str, dict[str, Any]]:
    """Load a bridge description from a local file.

    Args:
        file_path: Path written by the parser front end.

    Returns:
        Tuple of (source name used in diagnostics, decoded document).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        BridgeLoadError: If the file cannot be read or is not a bridge document.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        logger.error("Bridge description not found: %s", file_path)
        raise FileNotFoundError(f"Bridge description not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("Bridge description without .json extension: %s", file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Cannot read %s: %s", file_path, e)
        raise BridgeLoadError(f"Cannot read {file_path}: {e}") from e

    return str(file_path), _decode(text, str(file_path))


def load_bridge_url(url: str, timeout: int = 30) -> tuple[str, dict[str, Any]]:
    """Fetch a bridge description over HTTP.

    Args:
        url: Location of the document.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (url, decoded document).

    Raises:
        BridgeLoadError: If the URL is malformed, the request fails or the
            body is not a bridge document.
    """
    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise BridgeLoadError(f"Invalid URL: {url}")

    logger.debug("Fetching bridge description from %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise BridgeLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise BridgeLoadError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise BridgeLoadError(f"Request error for URL {url}: {e}") from e

    return url, _decode(response.text, url)


def load_bridge_stream(stream: TextIO | None = None) -> tuple[str, dict[str, Any]]:
    """Load a bridge description piped in on a text stream, stdin by default."""
    stream = stream or sys.stdin
    return STDIN_SOURCE, _decode(stream.read(), STDIN_SOURCE)


def load_bridge(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, dict[str, Any]]:
    """Load a bridge description from exactly one of a file or a URL.

    Raises:
        BridgeLoadError: If neither or both sources are given, or loading fails.
        FileNotFoundError: If the file doesn't exist.
    """
    if not file_path and not url:
        raise BridgeLoadError("Either file_path or url must be provided")

    if file_path and url:
        raise BridgeLoadError("Cannot specify both file_path and url")

    if file_path:
        return load_bridge_file(file_path)
    return load_bridge_url(url, timeout)
