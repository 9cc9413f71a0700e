"""Stores JSON schema documents keyed by type and version.

The store keeps all entries in memory. When a directory is given, the
entries are loaded from and written back to a single JSON index file in
that directory after every change.
"""

import json
import os
from typing import Dict, List, Tuple

from jsavro.constants import STORE_FILE_NAME


class InvalidSchemaError(ValueError):
    """Exception raised when schema content is not a JSON document."""


class DuplicateSchemaError(ValueError):
    """Exception raised when a schema with the same type and version exists."""

    def __init__(self, type: str, version: str):
        self.type = type
        self.version = version
        super().__init__(f"Schema with type '{type}' and version '{version}' already exists")


class SchemaNotFoundError(ValueError):
    """Exception raised when no schema exists for a type and version."""

    def __init__(self, type: str, version: str):
        self.type = type
        self.version = version
        super().__init__(f"Schema not found for type '{type}' and version '{version}'")


class SchemaEntry:
    """A stored JSON schema document."""

    def __init__(self, id: int, type: str, version: str, schema_content: str):
        self.id = id
        self.type = type
        self.version = version
        self.schema_content = schema_content

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'type': self.type,
            'version': self.version,
            'schema_content': self.schema_content
        }

    def __eq__(self, other) -> bool:
        return isinstance(other, SchemaEntry) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"SchemaEntry(id={self.id}, type={self.type!r}, version={self.version!r})"


class SchemaStore:
    """Key-value store of JSON schema documents with (type, version) uniqueness."""

    def __init__(self, store_path: str | None = None):
        self.store_path = store_path
        self.entries: Dict[Tuple[str, str], SchemaEntry] = {}
        self.next_id = 1
        if store_path:
            self.load()

    @property
    def index_file_path(self) -> str:
        return os.path.join(self.store_path or '', STORE_FILE_NAME)

    def load(self) -> None:
        """Load the entries from the store directory, if it has an index."""
        if not os.path.exists(self.index_file_path):
            return
        with open(self.index_file_path, 'r', encoding='utf-8') as f:
            items = json.load(f)
        for item in items:
            entry = SchemaEntry(item['id'], item['type'], item['version'], item['schema_content'])
            self.entries[(entry.type, entry.version)] = entry
            self.next_id = max(self.next_id, entry.id + 1)

    def flush(self) -> None:
        """Write the entries to the store directory."""
        if not self.store_path:
            return
        if not os.path.exists(self.store_path):
            os.makedirs(self.store_path, exist_ok=True)
        with open(self.index_file_path, 'w', encoding='utf-8') as f:
            json.dump([e.to_dict() for e in self.entries.values()], f, indent=4)

    def exists(self, type: str, version: str) -> bool:
        return (type, version) in self.entries

    def save(self, type: str, version: str, schema_content: str) -> SchemaEntry:
        """
        Store a schema document.

        Args:
            type (str): The logical type of the schema.
            version (str): The version of the schema.
            schema_content (str): The JSON schema text.

        Returns:
            SchemaEntry: The stored entry.

        Raises:
            InvalidSchemaError: If the content is not a JSON document.
            DuplicateSchemaError: If the type and version are already taken.
        """
        try:
            json.loads(schema_content)
        except (json.JSONDecodeError, TypeError) as e:
            raise InvalidSchemaError(f'Invalid JSON schema: {e}') from e
        if self.exists(type, version):
            raise DuplicateSchemaError(type, version)
        entry = SchemaEntry(self.next_id, type, version, schema_content)
        self.entries[(type, version)] = entry
        try:
            self.flush()
        except Exception:
            # keep memory in step with the index file
            del self.entries[(type, version)]
            raise
        self.next_id += 1
        return entry

    def get(self, type: str, version: str) -> SchemaEntry:
        """Get the schema stored for a type and version."""
        entry = self.entries.get((type, version))
        if entry is None:
            raise SchemaNotFoundError(type, version)
        return entry

    def list_schemas(self) -> List[SchemaEntry]:
        """List the stored schemas in the order they were saved."""
        return sorted(self.entries.values(), key=lambda e: e.id)
