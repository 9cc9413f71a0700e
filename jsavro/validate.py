"""Validates JSON instances against JSON schemas.

Structural validation is delegated to the jsonschema library using the
Draft 7 rules.
"""

import json
from typing import Any, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from referencing.exceptions import Unresolvable


class ValidationResult:
    """Result of validating a JSON instance against a schema."""

    def __init__(self, is_valid: bool, errors: List[str] = None, instance_path: str = None):
        self.is_valid = is_valid
        self.errors = errors or []
        self.instance_path = instance_path

    def __str__(self) -> str:
        if self.is_valid:
            return f"✓ Valid" + (f": {self.instance_path}" if self.instance_path else "")
        else:
            prefix = f"{self.instance_path}: " if self.instance_path else ""
            return f"✗ Invalid: {prefix}" + "; ".join(self.errors)

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors})"

    def to_dict(self) -> dict:
        return {'valid': self.is_valid, 'errors': self.errors}


def format_error_path(path) -> str:
    """Render a jsonschema error path as a JSON pointer."""
    return '#' + ''.join(f'/{p}' for p in path)


def validate_instance(instance: Any, schema: Any) -> ValidationResult:
    """Validates a parsed JSON instance against a parsed JSON schema.

    Args:
        instance: The JSON value to validate
        schema: The JSON schema

    Returns:
        ValidationResult with validation status and any errors
    """
    try:
        Draft7Validator.check_schema(schema)
        validator = Draft7Validator(schema)
        errors = [f"{format_error_path(e.absolute_path)}: {e.message}"
                  for e in sorted(validator.iter_errors(instance), key=lambda e: format_error_path(e.absolute_path))]
    except SchemaError as e:
        return ValidationResult(is_valid=False, errors=[f"Validation error: {e.message}"])
    except Unresolvable as e:
        return ValidationResult(is_valid=False, errors=[f"Validation error: {e}"])
    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def validate_json(json_data: str, schema_content: str) -> ValidationResult:
    """Validates JSON instance text against JSON schema text.

    Malformed text on either side yields an invalid result rather than an
    exception.
    """
    try:
        schema = json.loads(schema_content)
        instance = json.loads(json_data)
    except (json.JSONDecodeError, TypeError) as e:
        return ValidationResult(is_valid=False, errors=[f"Validation error: {e}"])
    return validate_instance(instance, schema)


def validate_file(instance_file: str, schema_content: str) -> ValidationResult:
    """Validates a JSON instance file against JSON schema text."""
    with open(instance_file, 'r', encoding='utf-8') as f:
        content = f.read()
    result = validate_json(content, schema_content)
    result.instance_path = instance_file
    return result
