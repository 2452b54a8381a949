"""
Schema-to-type resolution.

Walks each named component schema and flattens it into an ordered list
of ``Type`` records. Inline object properties are extracted into their
own types, which are emitted before the type that uses them.

Schemas the resolver does not understand are never fatal: they are
reported through a ``Diagnostics`` collector and either skipped or
typed with the configured untyped placeholder.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig
from .naming import NameNormalizer, get_default_normalizer
from .schema import OpenAPIDocument, SchemaNode, SchemaType
from .types import Enum, Property, Type

logger = get_logger(__name__)

# Struct member holding additionalProperties values
OPEN_MAP_MEMBER = "additional_properties"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while resolving a schema."""

    schema_name: str
    message: str

    def __str__(self) -> str:
        return self.message


class Diagnostics:
    """Collects diagnostics as data and mirrors them to the log."""

    def __init__(self):
        self.entries: List[Diagnostic] = []

    def warn(self, schema_name: str, message: str) -> None:
        self.entries.append(Diagnostic(schema_name, message))
        logger.warning(message)

    def info(self, schema_name: str, message: str) -> None:
        """Record an expected skip that is worth reporting but not alarming."""
        self.entries.append(Diagnostic(schema_name, message))
        logger.info(message)

    @property
    def messages(self) -> List[str]:
        return [entry.message for entry in self.entries]

    def for_schema(self, schema_name: str) -> List[Diagnostic]:
        return [entry for entry in self.entries if entry.schema_name == schema_name]

    def __len__(self) -> int:
        return len(self.entries)


class TypeResolver:
    """Converts schema nodes into intermediate ``Type`` records."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        normalizer: Optional[NameNormalizer] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.config = config or GeneratorConfig()
        self.normalizer = normalizer or get_default_normalizer()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        # ids of the raw object schemas currently being resolved
        self._active: Set[int] = set()

    # Public API

    def resolve_document(self, document: OpenAPIDocument) -> List[Type]:
        """Resolve every component schema in document order."""
        all_types: List[Type] = []

        for name, node in document.schemas.items():
            types = self.resolve(name, node)
            if not types:
                logger.info("Missing type data for schema %s", name)
            all_types.extend(types)

        self._report_collisions(all_types)
        logger.debug(
            "Resolved %d schema(s) into %d type(s)", len(document.schemas), len(all_types)
        )
        return all_types

    def resolve(self, name: str, node: SchemaNode) -> List[Type]:
        """
        Resolve one named schema.

        Returns:
            The types for this schema; nested types precede their parent.
            Empty when the schema is a reference or its type is not handled.
        """
        if node.ref:
            self.diagnostics.info(name, f"Schema {name} was a reference, skipping")
            return []

        schema_type = SchemaType.of(node.type)

        if schema_type == SchemaType.STRING:
            return self._resolve_string(name, node)
        elif schema_type == SchemaType.BOOLEAN:
            return [self._alias_type(name, node, self.config.boolean_type)]
        elif schema_type == SchemaType.INTEGER:
            return [self._alias_type(name, node, self.config.integer_type)]
        elif schema_type == SchemaType.OBJECT:
            return self._resolve_object(name, node)
        elif schema_type == SchemaType.ARRAY:
            return [self._resolve_array(name, node)]
        else:
            self.diagnostics.warn(
                name, f"{name} had an unmatched type in resolve: {node.type!r}"
            )
            return []

    # Shapes

    def _new_type(self, name: str, node: SchemaNode) -> Type:
        return Type(
            schema_name=name,
            type_name=self.normalizer.type_name(name),
            filename=self.normalizer.file_slug(name),
            comment=prepare_comment(node.description),
        )

    def _alias_type(self, name: str, node: SchemaNode, alias: str) -> Type:
        t = self._new_type(name, node)
        t.alias = alias
        return t

    def _resolve_string(self, name: str, node: SchemaNode) -> List[Type]:
        t = self._alias_type(name, node, self.config.string_type)

        values = node.enum
        if values:
            if not isinstance(values[0], str):
                self.diagnostics.warn(
                    name,
                    f"{name} has a non-string enum type ({type(values[0]).__name__}), "
                    "which may not work with enum generation",
                )

            for value in values:
                if not isinstance(value, str):
                    self.diagnostics.warn(
                        name,
                        f"{name} has a non-string enum value {value!r} "
                        f"({type(value).__name__}), skipping it",
                    )
                    continue
                t.enum.append(Enum(name=self.normalizer.type_name(value), value=value))

            if not t.enum:
                self.diagnostics.warn(
                    name, f"{name} has no usable string enum values"
                )

            self._report_enum_collisions(name, t.enum)

        return [t]

    def _resolve_object(self, name: str, node: SchemaNode) -> List[Type]:
        key = id(node.raw)
        self._active.add(key)
        try:
            return self._build_object(name, node)
        finally:
            self._active.discard(key)

    def _build_object(self, name: str, node: SchemaNode) -> List[Type]:
        types: List[Type] = []

        t = self._new_type(name, node)
        t.base_class = self.config.struct_base_class

        required = set(node.required)

        for property_name, property_node in node.properties.items():
            prop = Property(
                name=self.normalizer.property_name(property_name),
                schema_name=property_name,
                type=self.config.untyped_type,
                required=property_name in required,
            )

            if property_node.ref:
                prop.type = self.normalizer.type_name(property_node.ref_name)
            else:
                property_type = SchemaType.of(property_node.type)

                if property_type == SchemaType.STRING:
                    prop.type = self.config.string_type
                elif property_type == SchemaType.BOOLEAN:
                    prop.type = self.config.boolean_type
                elif property_type == SchemaType.INTEGER:
                    prop.type = self.config.integer_type
                elif property_type == SchemaType.OBJECT:
                    nested_name = (
                        f"{name}{self.config.nested_name_separator}{property_name}"
                    )
                    if id(property_node.raw) in self._active:
                        self.diagnostics.warn(
                            name,
                            f"{name}.{property_name} is a cyclic inline schema, "
                            f"using {prop.type}",
                        )
                    else:
                        types.extend(self.resolve(nested_name, property_node))
                        prop.type = self.normalizer.type_name(nested_name)
                elif property_type == SchemaType.ARRAY:
                    prop.is_array = True
                    prop.type, _ = self._resolve_items(
                        name, f"{name}.{property_name}", property_node
                    )
                elif property_node.type is None:
                    self.diagnostics.warn(
                        name,
                        f"{name}.{property_name} has no type, skipping property",
                    )
                    continue
                else:
                    self.diagnostics.warn(
                        name,
                        f"{name}.{property_name} had an unmatched type in "
                        f"resolve_object: {property_node.type!r}",
                    )

            t.properties.append(prop)

        # Consistent output regardless of document ordering
        t.properties.sort(key=lambda p: p.name)

        extra = node.additional_properties
        if isinstance(extra, SchemaNode):
            if not extra.ref and extra.type == SchemaType.STRING.value:
                t.additional_properties = self.config.string_type
            else:
                self.diagnostics.warn(
                    name,
                    f"{name} has additionalProperties of type "
                    f"{extra.ref or extra.type!r}, which is not yet handled",
                )

        self._report_property_collisions(
            name, t.properties, open_map=t.additional_properties is not None
        )

        types.append(t)
        return types

    def _resolve_array(self, name: str, node: SchemaNode) -> Type:
        t = self._new_type(name, node)
        t.is_array = True

        element_type, unconstrained = self._resolve_items(name, name, node)
        if unconstrained:
            # Array of untyped: no alias, element marker in additional_properties
            t.additional_properties = element_type
        else:
            t.alias = element_type

        return t

    def _resolve_items(
        self, schema_name: str, context: str, node: SchemaNode
    ) -> Tuple[str, bool]:
        """
        Resolve an array's element type reference.

        Returns:
            The element type and whether the items were unconstrained.
        """
        items = node.items
        untyped = self.config.untyped_type

        if items is None:
            self.diagnostics.warn(
                schema_name, f"{context} is an array without items"
            )
            return untyped, False

        if items.is_unconstrained:
            return untyped, True

        if items.ref:
            return self.normalizer.type_name(items.ref_name), False

        item_type = SchemaType.of(items.type)
        primitives: Dict[SchemaType, str] = {
            SchemaType.STRING: self.config.string_type,
            SchemaType.INTEGER: self.config.integer_type,
            SchemaType.BOOLEAN: self.config.boolean_type,
        }
        if item_type in primitives:
            return primitives[item_type], False

        self.diagnostics.warn(
            schema_name,
            f"{context} had unmatched array items: {items.type!r}",
        )
        return untyped, False

    # Collision reporting

    def _report_collisions(self, types: List[Type]) -> None:
        seen_types: Dict[str, str] = {}
        seen_files: Dict[str, str] = {}

        for t in types:
            previous = seen_types.setdefault(t.type_name, t.schema_name)
            if previous != t.schema_name:
                self.diagnostics.warn(
                    t.schema_name,
                    f"Schemas {previous} and {t.schema_name} both normalize "
                    f"to type {t.type_name}",
                )

            previous = seen_files.setdefault(t.filename, t.schema_name)
            if previous != t.schema_name:
                self.diagnostics.warn(
                    t.schema_name,
                    f"Schemas {previous} and {t.schema_name} both write "
                    f"{t.filename}{self.config.file_extension}",
                )

    def _report_property_collisions(
        self, name: str, properties: List[Property], open_map: bool = False
    ) -> None:
        for current, following in zip(properties, properties[1:]):
            if current.name == following.name:
                self.diagnostics.warn(
                    name,
                    f"{name}.{current.schema_name} and {name}.{following.schema_name} "
                    f"both normalize to property {current.name}",
                )

        if not open_map:
            return
        for prop in properties:
            if prop.name == OPEN_MAP_MEMBER:
                self.diagnostics.warn(
                    name,
                    f"{name}.{prop.schema_name} clashes with the {OPEN_MAP_MEMBER} "
                    "member holding additionalProperties",
                )

    def _report_enum_collisions(self, name: str, literals: List[Enum]) -> None:
        seen: Dict[str, str] = {}
        for literal in literals:
            previous = seen.setdefault(literal.name, literal.value)
            if previous != literal.value:
                self.diagnostics.warn(
                    name,
                    f"{name} enum values {previous!r} and {literal.value!r} "
                    f"both normalize to {literal.name}",
                )


def prepare_comment(text: str) -> str:
    return text.strip()


def resolve_types(
    document: OpenAPIDocument,
    config: Optional[GeneratorConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> List[Type]:
    """Resolve a whole document with a fresh resolver."""
    return TypeResolver(config, diagnostics=diagnostics).resolve_document(document)
