"""Constants for the jsavro package."""

import os

# Namespace assigned to every record produced by one translation run
DEFAULT_NAMESPACE = 'org.example.generated'

# Suffix appended to an array's name to name its item type
ARRAY_ITEM_SUFFIX = 'Item'

# Suffix appended to an owning field's name to name its enum type
ENUM_SUFFIX = 'Enum'

# JSON Schema types that translate to Avro primitives
PRIMITIVE_TYPE_MAP = {
    'integer': 'int',
    'number': 'double',
    'boolean': 'boolean',
    'null': 'null',
}

# String formats carried as epoch-millisecond timestamps
TIMESTAMP_FORMATS = ('date', 'date-time')

STORE_FILE_NAME = 'schemas.json'

DEFAULT_STORE_PATH = os.environ.get('JSAVRO_STORE', os.path.join(os.path.expanduser('~'), '.jsavro'))
