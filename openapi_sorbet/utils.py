"""Utility functions for loading OpenAPI documents.

This module provides functions for loading YAML or JSON documents from
files and URLs with proper error handling and validation.
"""

import re
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests
import yaml

from .codegen.core.schema import DocumentError, OpenAPIDocument
from .logging_config import get_logger

logger = get_logger(__name__)

DOCUMENT_SUFFIXES = {".yaml", ".yml", ".json"}


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader resolving only true/false as booleans (YAML 1.2 core schema).

    Plain `on`, `off`, `yes`, `no`, `y` and `n` stay strings, so enum
    literals and property names survive loading unchanged.
    """


DocumentLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:bool"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
DocumentLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class DocumentLoadError(Exception):
    """Custom exception for document loading errors."""

    pass


def parse_document_text(text: str, source: str) -> Any:
    """Parse YAML or JSON text (JSON is a subset of YAML 1.2)."""
    try:
        return yaml.load(text, Loader=DocumentLoader)
    except yaml.YAMLError as e:
        logger.error(f"Invalid document {source}: {e}")
        raise DocumentLoadError(f"Invalid YAML/JSON in {source}: {e}") from e


def load_document_from_file(file_path: str | Path) -> OpenAPIDocument:
    """Load an OpenAPI document from a local file.

    Args:
        file_path: Path to the YAML or JSON document.

    Returns:
        The parsed document.

    Raises:
        DocumentLoadError: If the file is missing, unreadable or not an
            OpenAPI document.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load document from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise DocumentLoadError(f"File not found: {file_path}")

    if file_path.suffix.lower() not in DOCUMENT_SUFFIXES:
        # Don't raise, just warn - might still be valid YAML
        logger.warning(f"File does not have a YAML/JSON extension: {file_path}")

    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise DocumentLoadError(f"Error reading file {file_path}: {e}") from e

    document = _to_document(parse_document_text(text, str(file_path)), str(file_path))
    logger.info(f"Loaded {len(document.schemas)} schema(s) from {file_path}")
    return document


def load_document_from_url(url: str, timeout: int = 30) -> OpenAPIDocument:
    """Load an OpenAPI document from a URL.

    Args:
        url: URL to fetch the document from.
        timeout: Request timeout in seconds.

    Raises:
        DocumentLoadError: If the URL is invalid, the request fails, or the
            response is not an OpenAPI document.
    """
    logger.debug(f"Attempting to load document from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise DocumentLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise DocumentLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise DocumentLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise DocumentLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise DocumentLoadError(f"Request error for URL {url}: {e}") from e

    document = _to_document(parse_document_text(response.text, url), url)
    logger.info(f"Loaded {len(document.schemas)} schema(s) from {url}")
    return document


def load_document(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> OpenAPIDocument:
    """Load an OpenAPI document from either a file or URL.

    Args:
        file_path: Path to local document (mutually exclusive with url).
        url: URL to fetch the document from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Raises:
        DocumentLoadError: If neither or both parameters are provided, or
            loading fails.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise DocumentLoadError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise DocumentLoadError("Cannot specify both file_path and url")

    if file_path:
        return load_document_from_file(file_path)
    else:
        return load_document_from_url(url, timeout)


def _to_document(data: Any, source: str) -> OpenAPIDocument:
    try:
        return OpenAPIDocument.from_dict(data, source)
    except DocumentError as e:
        logger.error(str(e))
        raise DocumentLoadError(str(e)) from e
