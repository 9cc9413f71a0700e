""" JSON schema to Avro schema converter. """

# pylint: disable=line-too-long

import json
import os
from typing import Any, Set

from jsavro.common import avro_type_name, symbol_text, unique
from jsavro.constants import ARRAY_ITEM_SUFFIX, DEFAULT_NAMESPACE, ENUM_SUFFIX, PRIMITIVE_TYPE_MAP, TIMESTAMP_FORMATS


class MalformedInputError(ValueError):
    """Exception raised when the JSON schema text cannot be parsed."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f'Error converting JSON Schema to Avro: {message}')


class JsonToAvroConverter:
    """
    Converts JSON schema to Avro schema.

    Only the 'type', 'properties', 'required', 'items', 'format' and 'enum'
    keywords are interpreted. Anything the converter does not recognize
    degrades to an Avro string instead of failing.

    Attributes:
    root_namespace: The namespace assigned to all generated records.

    """

    def __init__(self, namespace: str | None = None) -> None:
        self.root_namespace = namespace or DEFAULT_NAMESPACE

    def create_avro_record(self, name: str, namespace: str, fields: list) -> dict:
        """Create an Avro record type."""
        return {
            'type': 'record',
            'name': avro_type_name(name),
            'namespace': namespace,
            'fields': fields
        }

    def create_enum_type(self, name: str, symbols: list) -> dict:
        """Create an Avro enum type."""
        return {
            'type': 'enum',
            'name': name,
            'symbols': unique([symbol_text(s) for s in symbols])
        }

    def create_array_type(self, items: list | dict | str) -> dict:
        """Create an Avro array type."""
        return {
            'type': 'array',
            'items': items
        }

    def nullable(self, avro_type: list | dict | str) -> list:
        """Wrap a type in a union with null."""
        return ['null', avro_type]

    def get_json_type(self, json_type: Any) -> Any:
        """Get the declared type of a JSON schema node, defaulting to 'object'."""
        if not isinstance(json_type, dict):
            return 'object'
        type_name = json_type.get('type', 'object')
        # "type": null reads as the 'null' type
        return 'null' if type_name is None else type_name

    def unique_type_name(self, name: str, named_types: Set[str]) -> str:
        """Claim a name for a named type, numbering repeats within one translation."""
        unique_name = name
        count = 2
        while unique_name in named_types:
            unique_name = f'{name}{count}'
            count += 1
        named_types.add(unique_name)
        return unique_name

    def get_required_fields(self, json_object: dict) -> Set[str]:
        """Collect the names listed in the 'required' keyword."""
        required = json_object.get('required')
        if not isinstance(required, list):
            return set()
        return {symbol_text(r) for r in required}

    def json_schema_primitive_to_avro_type(self, json_primitive: str, format: Any, enum: Any, name: str, named_types: Set[str]) -> str | dict:
        """
        Convert a JSON-schema primitive type to Avro type.

        Args:
            json_primitive (str): The JSON-schema primitive type to be converted.
            format (any): The value of the 'format' keyword, if present.
            enum (any): The value of the 'enum' keyword, if present.
            name (str): The name of the field owning the type.
            named_types (set): The names of the named types already emitted.

        Returns:
            str | dict: The converted Avro type.
        """
        if json_primitive == 'string':
            if isinstance(enum, list):
                enum_name = self.unique_type_name(avro_type_name(name or '') + ENUM_SUFFIX, named_types)
                return self.create_enum_type(enum_name, enum)
            if isinstance(format, str) and format in TIMESTAMP_FORMATS:
                return 'long'
            return 'string'
        # unrecognized and non-string type values fall back to string
        return PRIMITIVE_TYPE_MAP.get(json_primitive, 'string') if isinstance(json_primitive, str) else 'string'

    def json_type_to_avro_type(self, json_type: Any, name: str, named_types: Set[str] | None = None) -> dict | list | str:
        """Convert a JSON type to Avro type."""
        if named_types is None:
            named_types = set()
        type_name = self.get_json_type(json_type)
        if type_name == 'object':
            return self.json_schema_object_to_avro_record(name, json_type if isinstance(json_type, dict) else {}, named_types)
        if type_name == 'array':
            return self.json_schema_array_to_avro_array(name, json_type, named_types)
        return self.json_schema_primitive_to_avro_type(type_name, json_type.get('format'), json_type.get('enum'), name, named_types)

    def json_schema_array_to_avro_array(self, name: str, json_array: dict, named_types: Set[str]) -> dict:
        """Convert a JSON schema array declaration to an Avro array."""
        if 'items' not in json_array:
            return self.create_array_type('string')
        item_name = (name or '') + ARRAY_ITEM_SUFFIX
        return self.create_array_type(self.json_type_to_avro_type(json_array['items'], item_name, named_types))

    def json_schema_object_to_avro_record(self, name: str, json_object: dict, named_types: Set[str]) -> dict:
        """Convert a JSON schema object declaration to an Avro record."""
        avro_record = self.create_avro_record(name, self.root_namespace, [])
        # record names are kept as given, but enums must not reuse them
        if avro_record['name']:
            named_types.add(avro_record['name'])
        properties = json_object.get('properties')
        if not isinstance(properties, dict):
            return avro_record
        # collect the required fields so we can make those fields non-null
        required_fields = self.get_required_fields(json_object)
        for field_name, json_field_type in properties.items():
            avro_field_type = self.json_type_to_avro_type(json_field_type, field_name, named_types)
            if field_name in required_fields:
                avro_record['fields'].append({
                    'name': field_name,
                    'type': avro_field_type
                })
            else:
                avro_record['fields'].append({
                    'name': field_name,
                    'type': self.nullable(avro_field_type),
                    'default': None
                })
        return avro_record

    def jsons_to_avro(self, json_schema: Any, name: str) -> dict | list | str:
        """Convert a parsed JSON-schema document to an Avro-schema."""
        return self.json_type_to_avro_type(json_schema, name, set())

    def convert_jsons_string_to_avro(self, content: str, name: str) -> str:
        """Convert JSON schema text to pretty-printed Avro schema text."""
        try:
            json_schema = json.loads(content)
        except (json.JSONDecodeError, TypeError) as e:
            raise MalformedInputError(str(e)) from e
        avro_schema = self.jsons_to_avro(json_schema, name)
        return json.dumps(avro_schema, indent=2)


def convert_jsons_string_to_avro(content: str, name: str, namespace: str | None = None) -> str:
    """Convert JSON schema text to Avro schema text."""
    converter = JsonToAvroConverter(namespace)
    return converter.convert_jsons_string_to_avro(content, name)


def convert_jsons_to_avro(json_schema_file_path: str, avro_schema_path: str, name: str = '', namespace: str = '') -> str:
    """Convert JSON schema file to Avro schema file."""

    if not json_schema_file_path:
        raise ValueError('JSON schema file path is required')
    if not os.path.exists(json_schema_file_path):
        raise FileNotFoundError(f'JSON schema file {json_schema_file_path} not found')

    if not name:
        name = os.path.basename(json_schema_file_path).split('.')[0]
    with open(json_schema_file_path, 'r', encoding='utf-8') as json_file:
        content = json_file.read()
    avro_schema = convert_jsons_string_to_avro(content, name, namespace)

    # create the directory for the Avro schema file if it doesn't exist
    dir = os.path.dirname(avro_schema_path)
    if dir != '' and not os.path.exists(dir):
        os.makedirs(dir, exist_ok=True)
    with open(avro_schema_path, 'w', encoding='utf-8') as avro_file:
        avro_file.write(avro_schema)
    return avro_schema
