"""Tests for schema-to-type resolution."""

from __future__ import annotations

import logging

import pytest

from openapi_sorbet.codegen.core.config import GeneratorConfig
from openapi_sorbet.codegen.core.resolver import Diagnostics, TypeResolver, resolve_types
from openapi_sorbet.codegen.core.schema import SchemaNode
from openapi_sorbet.codegen.languages.sorbet.naming import create_ruby_normalizer


@pytest.fixture
def diagnostics() -> Diagnostics:
    return Diagnostics()


@pytest.fixture
def resolver(diagnostics: Diagnostics) -> TypeResolver:
    return TypeResolver(diagnostics=diagnostics)


def resolve(resolver: TypeResolver, name: str, raw) -> list:
    return resolver.resolve(name, SchemaNode(raw))


class TestDocument:
    def test_petstore_order(self, resolver, petstore_document) -> None:
        types = resolver.resolve_document(petstore_document)
        assert [t.schema_name for t in types] == [
            "Pet_owner",
            "Pet",
            "PetStatus",
            "Tag",
            "Pets",
        ]
        assert [t.filename for t in types] == [
            "pet_owner",
            "pet",
            "pet_status",
            "tag",
            "pets",
        ]

    def test_resolution_is_deterministic(self, petstore_document) -> None:
        first = resolve_types(petstore_document)
        second = resolve_types(petstore_document)
        assert first == second

    def test_missing_type_data_is_logged(self, resolver, make_document, caplog) -> None:
        caplog.set_level(logging.INFO, logger="openapi_sorbet")
        types = resolver.resolve_document(make_document({"Loose": {"description": "?"}}))
        assert types == []
        assert "Missing type data for schema Loose" in caplog.text

    def test_collisions_are_reported_without_changing_output(
        self, resolver, diagnostics, make_document
    ) -> None:
        types = resolver.resolve_document(
            make_document(
                {
                    "pet_status": {"type": "string"},
                    "PetStatus": {"type": "boolean"},
                }
            )
        )
        assert [t.type_name for t in types] == ["PetStatus", "PetStatus"]
        assert any("both normalize to type PetStatus" in m for m in diagnostics.messages)
        assert any("both write pet_status.rb" in m for m in diagnostics.messages)


class TestPrimitives:
    def test_string_alias(self, resolver) -> None:
        (t,) = resolve(resolver, "Name", {"type": "string", "description": "  A name. "})
        assert t.alias == "String"
        assert t.comment == "A name."
        assert t.is_alias()
        assert not t.is_object()
        assert not t.is_enum()

    def test_boolean_alias(self, resolver) -> None:
        (t,) = resolve(resolver, "Flag", {"type": "boolean"})
        assert t.alias == "T::Boolean"

    def test_integer_alias(self, resolver) -> None:
        (t,) = resolve(resolver, "Count", {"type": "integer"})
        assert t.alias == "Integer"

    def test_nullable_string(self, resolver) -> None:
        (t,) = resolve(resolver, "Name", {"type": ["string", "null"]})
        assert t.alias == "String"

    def test_configured_vocabulary(self, diagnostics) -> None:
        resolver = TypeResolver(
            GeneratorConfig(string_type="Str", untyped_type="Any"), diagnostics=diagnostics
        )
        (t,) = resolve(
            resolver,
            "Thing",
            {"type": "object", "properties": {"a": {"type": "string"}, "b": {"type": "number"}}},
        )
        assert [(p.name, p.type) for p in t.properties] == [("a", "Str"), ("b", "Any")]


class TestEnums:
    def test_string_enum(self, resolver) -> None:
        (t,) = resolve(
            resolver, "PetStatus", {"type": "string", "enum": ["available", "in-stock"]}
        )
        assert t.is_enum()
        assert [(e.name, e.value) for e in t.enum] == [
            ("Available", "available"),
            ("InStock", "in-stock"),
        ]

    def test_non_string_values_are_skipped(self, resolver, diagnostics) -> None:
        (t,) = resolve(resolver, "Mixed", {"type": "string", "enum": ["a", 2, "b"]})
        assert [e.value for e in t.enum] == ["a", "b"]
        assert len(diagnostics.for_schema("Mixed")) == 1

    def test_first_value_non_string_warns_twice(self, resolver, diagnostics) -> None:
        (t,) = resolve(resolver, "Codes", {"type": "string", "enum": [1, "two"]})
        assert [e.value for e in t.enum] == ["two"]
        assert len(diagnostics.for_schema("Codes")) == 2

    def test_zero_usable_values_still_emitted(self, resolver, diagnostics) -> None:
        (t,) = resolve(resolver, "Numbers", {"type": "string", "enum": [1, 2]})
        assert t.enum == []
        assert t.alias == "String"
        assert not t.is_enum()
        assert t.is_alias()
        assert any("no usable string enum values" in m for m in diagnostics.messages)

    def test_warnings_are_logged(self, resolver, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="openapi_sorbet"):
            resolve(resolver, "Mixed", {"type": "string", "enum": ["a", 2]})
        assert "non-string enum value 2" in caplog.text

    def test_literal_collisions_are_reported(self, resolver, diagnostics) -> None:
        (t,) = resolve(
            resolver, "Stock", {"type": "string", "enum": ["in-stock", "in_stock", "sold"]}
        )
        assert [e.name for e in t.enum] == ["InStock", "InStock", "Sold"]
        assert diagnostics.messages == [
            "Stock enum values 'in-stock' and 'in_stock' both normalize to InStock"
        ]

    def test_repeated_literal_is_not_a_collision(self, resolver, diagnostics) -> None:
        resolve(resolver, "Stock", {"type": "string", "enum": ["sold", "sold"]})
        assert len(diagnostics) == 0


class TestObjects:
    def test_properties_sorted_with_required(self, resolver) -> None:
        (t,) = resolve(
            resolver,
            "Pet",
            {
                "type": "object",
                "required": ["id"],
                "properties": {
                    "name": {"type": "string"},
                    "id": {"type": "integer"},
                    "alive": {"type": "boolean"},
                },
            },
        )
        assert t.is_object()
        assert t.base_class == "T::Struct"
        assert [(p.name, p.type, p.required) for p in t.properties] == [
            ("alive", "T::Boolean", False),
            ("id", "Integer", True),
            ("name", "String", False),
        ]

    def test_property_names_are_normalized(self, resolver) -> None:
        (t,) = resolve(
            resolver,
            "Pet",
            {"type": "object", "required": ["createdAt"], "properties": {"createdAt": {"type": "string"}}},
        )
        prop = t.get_property("created_at")
        assert prop.schema_name == "createdAt"
        assert prop.required
        assert prop.is_renamed

    def test_reference_property(self, resolver) -> None:
        (t,) = resolve(
            resolver,
            "Pet",
            {"type": "object", "properties": {"status": {"$ref": "#/components/schemas/pet_status"}}},
        )
        assert t.get_property("status").type == "PetStatus"

    def test_nested_object_is_emitted_first(self, resolver) -> None:
        types = resolve(
            resolver,
            "Pet",
            {
                "type": "object",
                "properties": {
                    "owner": {
                        "type": "object",
                        "properties": {
                            "address": {
                                "type": "object",
                                "properties": {"city": {"type": "string"}},
                            }
                        },
                    }
                },
            },
        )
        assert [t.schema_name for t in types] == [
            "Pet_owner_address",
            "Pet_owner",
            "Pet",
        ]
        assert types[1].get_property("address").type == "PetOwnerAddress"
        assert types[2].get_property("owner").type == "PetOwner"

    def test_array_properties(self, resolver) -> None:
        (t,) = resolve(
            resolver,
            "Pet",
            {
                "type": "object",
                "properties": {
                    "tags": {"type": "array", "items": {"$ref": "#/components/schemas/Tag"}},
                    "names": {"type": "array", "items": {"type": "string"}},
                    "anything": {"type": "array", "items": {}},
                },
            },
        )
        assert [(p.name, p.type, p.is_array) for p in t.properties] == [
            ("anything", "T.untyped", True),
            ("names", "String", True),
            ("tags", "Tag", True),
        ]

    def test_untyped_property_is_skipped(self, resolver, diagnostics) -> None:
        (t,) = resolve(
            resolver,
            "Pet",
            {"type": "object", "properties": {"mystery": {"description": "?"}, "id": {"type": "integer"}}},
        )
        assert [p.name for p in t.properties] == ["id"]
        assert any("Pet.mystery has no type" in m for m in diagnostics.messages)

    def test_unmatched_property_type_falls_back(self, resolver, diagnostics) -> None:
        (t,) = resolve(
            resolver,
            "Pet",
            {"type": "object", "properties": {"weight": {"type": "number"}}},
        )
        assert t.get_property("weight").type == "T.untyped"
        assert len(diagnostics.for_schema("Pet")) == 1

    def test_string_additional_properties(self, resolver) -> None:
        (t,) = resolve(
            resolver,
            "Labels",
            {"type": "object", "additionalProperties": {"type": "string"}},
        )
        assert t.additional_properties == "String"

    @pytest.mark.parametrize("extra", [True, False])
    def test_boolean_additional_properties_are_ignored(
        self, resolver, diagnostics, extra
    ) -> None:
        (t,) = resolve(
            resolver, "Labels", {"type": "object", "additionalProperties": extra}
        )
        assert t.additional_properties is None
        assert len(diagnostics) == 0

    def test_other_additional_properties_warn(self, resolver, diagnostics) -> None:
        (t,) = resolve(
            resolver,
            "Counts",
            {"type": "object", "additionalProperties": {"type": "integer"}},
        )
        assert t.additional_properties is None
        assert "not yet handled" in diagnostics.messages[0]

    def test_property_collisions_are_reported(self, resolver, diagnostics) -> None:
        (t,) = resolve(
            resolver,
            "Pet",
            {
                "type": "object",
                "properties": {"petName": {"type": "string"}, "pet_name": {"type": "string"}},
            },
        )
        assert [p.name for p in t.properties] == ["pet_name", "pet_name"]
        assert any("both normalize to property pet_name" in m for m in diagnostics.messages)

    def test_open_map_member_collision_is_reported(self, resolver, diagnostics) -> None:
        (t,) = resolve(
            resolver,
            "Labels",
            {
                "type": "object",
                "properties": {"additionalProperties": {"type": "string"}},
                "additionalProperties": {"type": "string"},
            },
        )
        assert [p.name for p in t.properties] == ["additional_properties"]
        assert t.additional_properties == "String"
        assert diagnostics.messages == [
            "Labels.additionalProperties clashes with the additional_properties "
            "member holding additionalProperties"
        ]

    def test_open_map_member_name_is_fine_without_open_map(
        self, resolver, diagnostics
    ) -> None:
        resolve(
            resolver,
            "Labels",
            {"type": "object", "properties": {"additional_properties": {"type": "string"}}},
        )
        assert len(diagnostics) == 0

    def test_cyclic_inline_schema_falls_back_to_untyped(self, resolver, diagnostics) -> None:
        node = {"type": "object", "properties": {"name": {"type": "string"}}}
        node["properties"]["child"] = node

        types = resolve(resolver, "Tree", node)

        assert [t.type_name for t in types] == ["Tree"]
        assert [(p.name, p.type) for p in types[0].properties] == [
            ("child", "T.untyped"),
            ("name", "String"),
        ]
        assert diagnostics.messages == [
            "Tree.child is a cyclic inline schema, using T.untyped"
        ]

    def test_indirect_cycle_stops_at_the_repeat(self, resolver, diagnostics) -> None:
        outer = {"type": "object", "properties": {}}
        inner = {"type": "object", "properties": {"back": outer}}
        outer["properties"]["inner"] = inner

        types = resolve(resolver, "Node", outer)

        assert [t.type_name for t in types] == ["NodeInner", "Node"]
        assert types[0].properties[0].type == "T.untyped"
        assert types[1].properties[0].type == "NodeInner"
        assert diagnostics.messages == [
            "Node_inner.back is a cyclic inline schema, using T.untyped"
        ]

    def test_shared_inline_schema_is_not_a_cycle(self, resolver, diagnostics) -> None:
        shared = {"type": "object", "properties": {"street": {"type": "string"}}}
        types = resolve(
            resolver,
            "Person",
            {"type": "object", "properties": {"home": shared, "work": shared}},
        )
        assert [t.type_name for t in types] == ["PersonHome", "PersonWork", "Person"]
        assert len(diagnostics) == 0


class TestArrays:
    def test_reference_items(self, resolver) -> None:
        (t,) = resolve(
            resolver, "Pets", {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}
        )
        assert t.is_array
        assert t.alias == "Pet"
        assert t.additional_properties is None

    @pytest.mark.parametrize(
        "item_type, expected",
        [("string", "String"), ("integer", "Integer"), ("boolean", "T::Boolean")],
    )
    def test_primitive_items(self, resolver, item_type, expected) -> None:
        (t,) = resolve(resolver, "List", {"type": "array", "items": {"type": item_type}})
        assert t.alias == expected

    @pytest.mark.parametrize("items", [True, {}])
    def test_unconstrained_items(self, resolver, diagnostics, items) -> None:
        (t,) = resolve(resolver, "Anything", {"type": "array", "items": items})
        assert t.is_array
        assert t.alias == ""
        assert t.additional_properties == "T.untyped"
        assert len(diagnostics) == 0

    def test_unmatched_items(self, resolver, diagnostics) -> None:
        (t,) = resolve(
            resolver, "Shapes", {"type": "array", "items": {"type": "object"}}
        )
        assert t.alias == "T.untyped"
        assert "had unmatched array items" in diagnostics.messages[0]

    def test_missing_items(self, resolver, diagnostics) -> None:
        (t,) = resolve(resolver, "Bare", {"type": "array"})
        assert t.alias == "T.untyped"
        assert "is an array without items" in diagnostics.messages[0]


class TestSkipped:
    def test_top_level_reference(self, resolver, diagnostics) -> None:
        assert resolve(resolver, "Alias", {"$ref": "#/components/schemas/Pet"}) == []
        assert diagnostics.messages == ["Schema Alias was a reference, skipping"]

    @pytest.mark.parametrize("raw", [{"type": "number"}, {}, {"oneOf": []}])
    def test_unrecognized_top_level(self, resolver, diagnostics, raw) -> None:
        assert resolve(resolver, "Odd", raw) == []
        assert len(diagnostics.for_schema("Odd")) == 1
        assert "Odd had an unmatched type in resolve" in diagnostics.messages[0]


def test_ruby_normalizer_suffixes_builtins(diagnostics) -> None:
    resolver = TypeResolver(normalizer=create_ruby_normalizer(), diagnostics=diagnostics)
    (t,) = resolve(
        resolver,
        "String",
        {"type": "object", "properties": {"end": {"type": "string"}}},
    )
    assert t.type_name == "String_"
    assert t.filename == "string"
    assert t.properties[0].name == "end_"
