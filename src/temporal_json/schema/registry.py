"""
Record schemas: which temporal type (and optional pattern) each field of a JSON
object holds, and the decoders/encoders that go with them.

Schemas are loaded from YAML config files via load_schema(name). Configs live in
the package configs/ directory unless a config_dir is given.
"""

import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field

from ..codecs import (
    DECODER_FACTORIES,
    DECODER_REGISTRY,
    ENCODER_FACTORIES,
    ENCODER_REGISTRY,
    Cursor,
    DecodeOutcome,
    Decoder,
    Encoder,
    Failure,
    FailureKind,
    Success,
)
from ..codecs.outcome import Path as JsonPath
from ..formatting import of_pattern

logger = logging.getLogger(__name__)


class SchemaConfigError(Exception):
    """Raised when schema YAML config is invalid or incomplete."""


@dataclass(frozen=True)
class FieldDefinition:
    """Definition of a temporal field: its JSON key and codecs."""

    key: str
    type_name: str
    decode_function: Decoder[Any]
    encode_function: Encoder[Any]
    pattern: Optional[str] = None
    required: bool = True

    def decode(self, cursor: Cursor) -> DecodeOutcome[Any]:
        """Decode the value under the cursor."""
        return self.decode_function(cursor)

    def encode(self, value: Any) -> str:
        """Encode a value to its JSON string."""
        return self.encode_function(value)


# --- Pydantic schema for YAML validation ---


class FieldSpec(BaseModel):
    """Schema for a single field in YAML config."""

    type: str = Field(..., min_length=1)
    pattern: Optional[str] = Field(None, min_length=1)
    key: Optional[str] = Field(None, min_length=1)
    required: bool = True

    model_config = {"extra": "forbid"}


def _parse_field(field_name: str, raw: Dict[str, Any]) -> FieldDefinition:
    """Parse raw YAML field dict into FieldDefinition."""
    spec = FieldSpec.model_validate(raw)
    if spec.type not in DECODER_REGISTRY:
        raise SchemaConfigError(
            f"Unknown type {spec.type!r} for field {field_name!r}. "
            f"Known: {list(DECODER_REGISTRY.keys())}."
        )
    if spec.pattern is None:
        decode_fn = DECODER_REGISTRY[spec.type]
        encode_fn = ENCODER_REGISTRY[spec.type]
    else:
        if spec.type not in DECODER_FACTORIES:
            raise SchemaConfigError(
                f"Type {spec.type!r} of field {field_name!r} does not accept a pattern. "
                f"Pattern types: {list(DECODER_FACTORIES.keys())}."
            )
        try:
            formatter = of_pattern(spec.pattern)
        except ValueError as e:
            raise SchemaConfigError(
                f"Invalid pattern {spec.pattern!r} for field {field_name!r}: {e}."
            ) from e
        decode_fn = DECODER_FACTORIES[spec.type](formatter)
        encode_fn = ENCODER_FACTORIES[spec.type](formatter)
    return FieldDefinition(
        key=spec.key or field_name,
        type_name=spec.type,
        decode_function=decode_fn,
        encode_function=encode_fn,
        pattern=spec.pattern,
        required=spec.required,
    )


def _config_text(name: str, config_dir: Optional[Path]) -> str:
    """Read a config from config_dir, or from the package configs/ when None."""
    source = config_dir
    if source is None:
        source = resources.files("temporal_json") / "configs"
    try:
        return (source / f"{name}.yaml").read_text()
    except FileNotFoundError as e:
        logger.error("Config %s not found in %s", name, source)
        raise SchemaConfigError(f"Config {name!r} not found in {source}.") from e


def _field_entries(name: str, content: str) -> Dict[str, Dict[str, Any]]:
    """Parse YAML content and check it is a non-empty mapping of field mappings."""
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.error("Invalid YAML in config %s: %s", name, e)
        raise SchemaConfigError(f"Invalid YAML in config {name!r}: {e}.") from e
    if not isinstance(raw, dict):
        raise SchemaConfigError(
            f"Config {name!r} root must be a mapping, got {type(raw).__name__}."
        )
    if not raw:
        raise SchemaConfigError(f"Config {name!r} is empty.")
    for field_name, field_raw in raw.items():
        if not isinstance(field_raw, dict):
            raise SchemaConfigError(
                f"Field {field_name!r} must be a mapping, got {type(field_raw).__name__}."
            )
    return raw


def load_schema(
    name: str,
    config_dir: Optional[Path] = None,
) -> Dict[str, FieldDefinition]:
    """Load a record schema from YAML config by name.

    Args:
        name: Config file name without extension (e.g. 'event_standard').
        config_dir: Optional directory for config files (used in tests). If None, loads from package configs/.

    Returns:
        Dict mapping field names to FieldDefinition, in config order.

    Raises:
        SchemaConfigError: If config is invalid, incomplete, or not found.
    """
    entries = _field_entries(name, _config_text(name, config_dir))
    schema: Dict[str, FieldDefinition] = {}
    seen_keys: Dict[str, str] = {}
    for field_name, field_raw in entries.items():
        try:
            definition = _parse_field(field_name, field_raw)
        except SchemaConfigError:
            raise
        except Exception as e:
            logger.exception("Failed to parse field %s", field_name)
            raise SchemaConfigError(
                f"Failed to parse field {field_name!r}: {e}."
            ) from e
        if definition.key in seen_keys:
            raise SchemaConfigError(
                f"Fields {seen_keys[definition.key]!r} and {field_name!r} of config "
                f"{name!r} both map to key {definition.key!r}."
            )
        seen_keys[definition.key] = field_name
        schema[field_name] = definition
    logger.debug("Loaded schema %s with %d fields", name, len(schema))
    return schema


def decode_record(
    schema: Mapping[str, FieldDefinition],
    data: Any,
    path: JsonPath = (),
) -> DecodeOutcome[Dict[str, Any]]:
    """Decode a JSON object field by field, stopping at the first failure.

    Args:
        schema: Field definitions, e.g. from load_schema
        data: JSON object (dict) as produced by json.loads
        path: Location of the object in the enclosing document

    Returns:
        Success with a dict of field name -> decoded value (absent optional
        fields are left out), or the first Failure.
    """
    cursor = Cursor(data, tuple(path))
    if not isinstance(data, dict):
        return cursor.type_mismatch("object")
    values: Dict[str, Any] = {}
    for field_name, definition in schema.items():
        if data.get(definition.key) is None:
            if not definition.required:
                continue
            if definition.key in data:
                return cursor.field(definition.key).type_mismatch("string")
            return Failure(
                FailureKind.MISSING_FIELD,
                f"Missing required field {definition.key!r} ({definition.type_name})",
                cursor.path + (definition.key,),
            )
        outcome = definition.decode(cursor.field(definition.key))
        if isinstance(outcome, Failure):
            return outcome
        values[field_name] = outcome.value
    return Success(values)


def encode_record(
    schema: Mapping[str, FieldDefinition], values: Mapping[str, Any]
) -> Dict[str, str]:
    """Encode field values into a JSON object keyed by each field's JSON key.

    Optional fields that are missing or None are left out.

    Raises:
        KeyError: If a required field has no value.
    """
    result: Dict[str, str] = {}
    for field_name, definition in schema.items():
        value = values.get(field_name)
        if value is None:
            if definition.required:
                raise KeyError(f"Missing value for required field {field_name!r}")
            continue
        result[definition.key] = definition.encode(value)
    return result
