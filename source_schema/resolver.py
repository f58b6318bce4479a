"""
Resolvers that supply external schema documents to the compiler.

The compiler never touches the network itself; it asks a resolver for the
document behind a URI (without fragment) and navigates the fragment itself.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import requests

from .api import ReferenceResolutionError

logger = logging.getLogger("source_schema")

GEOJSON_URI = "http://json.schemastore.org/geojson"

BUNDLED_SCHEMA_DIR = Path(__file__).parent / "schemas"


class SchemaResolver(ABC):
    """Capability interface for loading external schema documents."""

    @abstractmethod
    def resolve(self, uri: str) -> Dict[str, Any]:
        """
        Load the schema document identified by ``uri``.

        Args:
            uri: Absolute document URI, without fragment

        Returns:
            Parsed schema document

        Raises:
            ReferenceResolutionError: If the document cannot be loaded
        """


class InMemoryResolver(SchemaResolver):
    """Resolver backed by a fixed mapping of URI to document."""

    def __init__(self, documents: Optional[Mapping[str, Dict[str, Any]]] = None):
        self.documents: Dict[str, Dict[str, Any]] = dict(documents or {})

    def register(self, uri: str, document: Dict[str, Any]) -> None:
        self.documents[uri] = document

    def resolve(self, uri: str) -> Dict[str, Any]:
        try:
            return self.documents[uri]
        except KeyError:
            raise ReferenceResolutionError(uri, "no such document registered") from None


class HttpSchemaResolver(SchemaResolver):
    """
    Resolver that fetches documents over HTTP(S) with ``requests``.

    Fetched documents are cached by URI, so each document is requested once
    per resolver. Every failure (network error, timeout, non-2xx status or a
    body that is not a JSON object) raises ReferenceResolutionError.
    """

    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None):
        """
        Initialize a new HTTP resolver.

        Args:
            timeout: Seconds to wait for each request
            session: Optional session to reuse connections and settings
        """
        self.timeout = timeout
        self.session = session
        self._cache: Dict[str, Dict[str, Any]] = {}

    def _get(self, uri: str) -> requests.Response:
        if self.session is not None:
            return self.session.get(uri, timeout=self.timeout)
        return requests.get(uri, timeout=self.timeout)

    def resolve(self, uri: str) -> Dict[str, Any]:
        if uri in self._cache:
            return self._cache[uri]

        logger.debug(f"Fetching schema document {uri}")
        try:
            response = self._get(uri)
            response.raise_for_status()
            document = response.json()
        except requests.Timeout as e:
            raise ReferenceResolutionError(uri, f"timed out after {self.timeout}s") from e
        except requests.JSONDecodeError as e:
            raise ReferenceResolutionError(uri, f"response is not valid JSON: {e}") from e
        except requests.RequestException as e:
            raise ReferenceResolutionError(uri, str(e)) from e
        except ValueError as e:
            raise ReferenceResolutionError(uri, f"response is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise ReferenceResolutionError(uri, "response is not a JSON object")

        self._cache[uri] = document
        return document


def default_resolver() -> InMemoryResolver:
    """
    Build an offline resolver preloaded with the bundled documents.
    """
    from .loader import load_schema_document

    return InMemoryResolver({
        GEOJSON_URI: load_schema_document(BUNDLED_SCHEMA_DIR / "geojson.json"),
    })
