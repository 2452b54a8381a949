"""
Read-only view over an OpenAPI document's component schemas.

Wraps the raw mapping produced by the YAML/JSON loader so that the
resolver only deals with typed accessors instead of dictionary keys.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union, Any
from enum import Enum


class SchemaType(Enum):
    """Declared type tags understood by the resolver."""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    OBJECT = "object"
    ARRAY = "array"

    @classmethod
    def of(cls, tag: Any) -> Optional["SchemaType"]:
        """Map a raw type tag to a member, or None when it is not one we handle."""
        for member in cls:
            if member.value == tag:
                return member
        return None


class DocumentError(Exception):
    """Raised when a loaded document is not a usable OpenAPI document."""

    pass


class SchemaNode:
    """A single named schema, or an inline sub-schema nested within one."""

    def __init__(self, raw: Any):
        # Bare `true`/`false` are valid JSON schemas; keep them distinguishable
        self._raw = raw if isinstance(raw, dict) else {}
        self.is_unconstrained = raw is True or raw == {}

    @property
    def raw(self) -> Dict[str, Any]:
        return self._raw

    @property
    def ref(self) -> Optional[str]:
        """Reference target (``$ref``), if this node is a reference."""
        ref = self._raw.get("$ref")
        return ref if isinstance(ref, str) and ref else None

    @property
    def ref_name(self) -> Optional[str]:
        """Final path segment of the reference: ``#/components/schemas/Pet`` -> ``Pet``."""
        if self.ref is None:
            return None
        return self.ref.rstrip("/").split("/")[-1]

    @property
    def type(self) -> Any:
        """
        Declared type tag, or None when absent.

        OpenAPI 3.1 allows a list of types; a list holding exactly one
        non-null type is reduced to that type. Any other value is returned
        as-is so callers can report it.
        """
        declared = self._raw.get("type")
        if isinstance(declared, list):
            non_null = [t for t in declared if t != "null"]
            if len(non_null) == 1:
                return non_null[0]
        return declared

    @property
    def description(self) -> str:
        return str(self._raw.get("description") or "")

    @property
    def enum(self) -> Optional[List[Any]]:
        values = self._raw.get("enum")
        return list(values) if isinstance(values, list) else None

    @property
    def required(self) -> List[str]:
        names = self._raw.get("required")
        return list(names) if isinstance(names, list) else []

    @property
    def properties(self) -> Dict[str, "SchemaNode"]:
        """Property schemas in document order."""
        props = self._raw.get("properties")
        if not isinstance(props, dict):
            return {}
        return {str(name): SchemaNode(value) for name, value in props.items()}

    @property
    def items(self) -> Optional["SchemaNode"]:
        """Array item schema, or None when ``items`` is absent."""
        if "items" not in self._raw:
            return None
        return SchemaNode(self._raw["items"])

    @property
    def additional_properties(self) -> Union[bool, "SchemaNode", None]:
        """``True``/``False`` for the boolean form, a node for a schema, else None."""
        value = self._raw.get("additionalProperties")
        if isinstance(value, bool):
            return value
        if isinstance(value, dict):
            return SchemaNode(value)
        return None

    def __repr__(self) -> str:
        return f"SchemaNode({self._raw!r})"


@dataclass
class OpenAPIDocument:
    """The parts of an OpenAPI document the generator uses."""

    title: str = ""
    version: str = ""
    schemas: Dict[str, SchemaNode] = field(default_factory=dict)
    source: str = ""

    @classmethod
    def from_dict(cls, data: Any, source: str = "") -> "OpenAPIDocument":
        """
        Build a document from parsed YAML/JSON.

        Raises:
            DocumentError: If the data is not an OpenAPI/Swagger mapping
        """
        if not isinstance(data, dict):
            raise DocumentError(f"{source or 'Document'} is not a mapping")

        if "openapi" not in data and "swagger" not in data:
            raise DocumentError(
                f"{source or 'Document'} has no 'openapi' version field"
            )

        info = data.get("info") or {}
        if not isinstance(info, dict):
            raise DocumentError(f"{source or 'Document'} has an invalid 'info' section")

        components = data.get("components") or {}
        if not isinstance(components, dict):
            raise DocumentError(
                f"{source or 'Document'} has an invalid 'components' section"
            )

        # Swagger 2.0 keeps schemas under `definitions`
        raw_schemas = components.get("schemas", data.get("definitions")) or {}
        if not isinstance(raw_schemas, dict):
            raise DocumentError(
                f"{source or 'Document'} has an invalid 'components.schemas' section"
            )

        return cls(
            title=str(info.get("title") or ""),
            version=str(info.get("version") or ""),
            schemas={str(name): SchemaNode(node) for name, node in raw_schemas.items()},
            source=source,
        )
