"""Schema service combining the schema store, the instance validator and the Avro converter."""

import logging
import sys
from typing import List

from jsavro.constants import DEFAULT_STORE_PATH
from jsavro.jsonstoavro import JsonToAvroConverter
from jsavro.schemastore import SchemaEntry, SchemaStore
from jsavro.validate import ValidationResult, validate_json

# Configure module logger
logger = logging.getLogger(__name__)


class SchemaService:
    """
    Saves JSON schemas, validates JSON documents against them and derives Avro schemas.

    Attributes:
    store: The schema store holding the documents.
    converter: The JSON schema to Avro converter.
    """

    def __init__(self, store: SchemaStore, converter: JsonToAvroConverter | None = None):
        self.store = store
        self.converter = converter or JsonToAvroConverter()

    def save_schema(self, type: str, version: str, schema_content: str) -> SchemaEntry:
        """Save a schema; raises if the content is not JSON or the key is taken."""
        try:
            entry = self.store.save(type, version, schema_content)
        except ValueError as e:
            logger.warning("Rejected schema %s/%s: %s", type, version, e)
            raise
        logger.info("Saved schema %s/%s with id %d", type, version, entry.id)
        return entry

    def validate_json(self, type: str, version: str, json_data: str) -> ValidationResult:
        """Validate a JSON document against the schema stored for type and version."""
        entry = self.store.get(type, version)
        result = validate_json(json_data, entry.schema_content)
        logger.debug("Validated instance against %s/%s: valid=%s", type, version, result.is_valid)
        return result

    def get_avro_schema(self, type: str, version: str) -> str:
        """Derive the Avro schema text of the schema stored for type and version."""
        entry = self.store.get(type, version)
        logger.debug("Converting schema %s/%s to Avro", type, version)
        return self.converter.convert_jsons_string_to_avro(entry.schema_content, type)

    def list_schemas(self) -> List[SchemaEntry]:
        return self.store.list_schemas()


# Command entry points for the jsavro CLI

def open_service(store: str | None) -> SchemaService:
    """Open the schema service on a store directory, defaulting to the user store."""
    return SchemaService(SchemaStore(store or DEFAULT_STORE_PATH))


def register_schema(input: str, type: str, version: str, store: str) -> None:
    """Saves a JSON schema file under a type and version."""
    with open(input, 'r', encoding='utf-8') as f:
        content = f.read()
    entry = open_service(store).save_schema(type, version, content)
    print(f"Saved schema '{entry.type}' version '{entry.version}' with id {entry.id}")


def validate_instance_file(input: str, type: str, version: str, store: str, quiet: bool = False) -> None:
    """Validates a JSON file against a stored schema, exiting with 1 if invalid."""
    with open(input, 'r', encoding='utf-8') as f:
        json_data = f.read()
    result = open_service(store).validate_json(type, version, json_data)
    if not quiet:
        print(result)
    if not result.is_valid:
        sys.exit(1)


def write_avro_schema(type: str, version: str, store: str, avro_schema_path: str) -> None:
    """Writes the Avro schema derived from a stored schema."""
    avro_schema = open_service(store).get_avro_schema(type, version)
    with open(avro_schema_path, 'w', encoding='utf-8') as f:
        f.write(avro_schema)


def print_schema_list(store: str) -> None:
    """Prints the stored type and version keys."""
    for entry in open_service(store).list_schemas():
        print(f"{entry.id}\t{entry.type}\t{entry.version}")
