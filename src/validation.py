"""
Schema Validation - JSON Schema validation of declarative resource configs.

Provides functions to check resource schemas and to validate declarative
configurations against them.
"""

from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator, SchemaError


def validate_schema(schema: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate that a schema is a valid JSON Schema (Draft 7).

    Args:
        schema: The schema to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        Draft7Validator.check_schema(schema)
        return True, None
    except SchemaError as e:
        return False, f"Invalid schema: {e.message}"


def validate_spec_against_schema(
    spec: Dict[str, Any], schema: Dict[str, Any]
) -> Tuple[bool, Optional[str]]:
    """
    Validate a declarative resource config against a JSON Schema.

    Every violation is reported, ordered by its location in the config.

    Returns:
        Tuple of (is_valid, error_message)
    """
    errors = sorted(
        Draft7Validator(schema).iter_errors(spec),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    if not errors:
        return True, None

    messages = [
        f"{'.'.join(str(p) for p in error.absolute_path) or '(root)'}: {error.message}"
        for error in errors
    ]
    return False, "; ".join(messages)
