from __future__ import annotations

import copy
import logging
from pathlib import Path

import pytest
import yaml

from openapi_sorbet.codegen.core.schema import OpenAPIDocument


PETSTORE = {
    "openapi": "3.0.3",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "description": "A pet for sale.",
                "required": ["id", "name"],
                "properties": {
                    "name": {"type": "string"},
                    "id": {"type": "integer"},
                    "status": {"$ref": "#/components/schemas/PetStatus"},
                    "tags": {
                        "type": "array",
                        "items": {"$ref": "#/components/schemas/Tag"},
                    },
                    "owner": {
                        "type": "object",
                        "properties": {"fullName": {"type": "string"}},
                    },
                },
            },
            "PetStatus": {
                "type": "string",
                "enum": ["available", "pending", "sold"],
            },
            "Tag": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "visible": {"type": "boolean"},
                },
            },
            "Pets": {
                "type": "array",
                "items": {"$ref": "#/components/schemas/Pet"},
            },
        }
    },
}


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging so caplog keeps seeing records."""
    yield
    logger = logging.getLogger("openapi_sorbet")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def petstore_data() -> dict:
    """A fresh copy of the petstore document as parsed data."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def petstore_document(petstore_data) -> OpenAPIDocument:
    return OpenAPIDocument.from_dict(petstore_data, "petstore.yaml")


@pytest.fixture
def petstore_file(tmp_path: Path, petstore_data) -> Path:
    """The petstore document written as YAML under tmp_path."""
    path = tmp_path / "petstore.yaml"
    path.write_text(yaml.safe_dump(petstore_data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def make_document():
    """Build a document holding only the given component schemas."""

    def build(schemas: dict, **info) -> OpenAPIDocument:
        return OpenAPIDocument.from_dict(
            {
                "openapi": "3.0.3",
                "info": info or {"title": "Test", "version": "0.0.1"},
                "components": {"schemas": schemas},
            }
        )

    return build
