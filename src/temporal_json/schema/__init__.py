"""Record schemas loaded from YAML configs."""

from .registry import (
    FieldDefinition,
    SchemaConfigError,
    decode_record,
    encode_record,
    load_schema,
)

__all__ = [
    "FieldDefinition",
    "SchemaConfigError",
    "decode_record",
    "encode_record",
    "load_schema",
]
