"""
Field Mapping

Resource objects carry two independent key/value representations:

- wire: the JSON shape exchanged with the PAS API
- config: the shape used for import/export with configuration sources

Each model field is declared with ``wire_field()``, which records its wire
key, config key and omit-if-empty policy. ``field_table()`` turns those
declarations into a static descriptor table per class; the serializers below
only ever consult that table.
"""

import logging
import typing
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple, Type

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from ..protocols import FieldDecodeError

logger = logging.getLogger(__name__)

_MAPPING_KEY = "pas_mapping"


@dataclass(frozen=True)
class FieldDescriptor:
    """How one model attribute maps to the wire and config representations"""
    attr: str
    wire_key: Optional[str]
    config_key: Optional[str]
    omit_empty: bool
    inline: bool
    model: Optional[Type[BaseModel]] = None
    adapter: Optional[TypeAdapter] = field(default=None, compare=False, repr=False)


def wire_field(
    default: Any = None,
    *,
    wire: Optional[str] = None,
    config: Optional[str] = None,
    omit_empty: bool = True,
    inline: bool = False,
    default_factory=None,
    description: Optional[str] = None,
):
    """
    Declare a model field with its wire and config keys.

    Args:
        default: Default value
        wire: Key used in API payloads; None keeps the field off the wire
        config: Key used in the config representation; None keeps it out
        omit_empty: Drop the key from payloads when the value is empty
        inline: Nested model whose keys are merged into the parent
        default_factory: Default factory (lists, nested models)
        description: Field description
    """
    mapping = {"wire": wire, "config": config, "omit_empty": omit_empty, "inline": inline}
    if default_factory is not None:
        return Field(default_factory=default_factory, description=description,
                     json_schema_extra={_MAPPING_KEY: mapping})
    return Field(default, description=description, json_schema_extra={_MAPPING_KEY: mapping})


def _nested_model(annotation) -> Optional[Type[BaseModel]]:
    """Return the model class for ``Model`` or ``Optional[Model]`` annotations"""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    args = typing.get_args(annotation)
    if type(None) not in args:
        return None
    for candidate in args:
        if isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    return None


@lru_cache(maxsize=None)
def field_table(cls: Type[BaseModel]) -> Tuple[FieldDescriptor, ...]:
    """Descriptor table for a model class; fields without wire_field() are skipped"""
    descriptors = []
    for attr, info in cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        mapping = extra.get(_MAPPING_KEY)
        if mapping is None:
            continue
        model = _nested_model(info.annotation)
        descriptors.append(
            FieldDescriptor(
                attr=attr,
                wire_key=mapping["wire"],
                config_key=mapping["config"],
                omit_empty=mapping["omit_empty"],
                inline=mapping["inline"],
                model=model,
                adapter=None if model else TypeAdapter(info.annotation),
            )
        )
    return tuple(descriptors)


def is_empty(value: Any) -> bool:
    """Empty in the omit-if-empty sense: None, "", 0, False, empty containers"""
    if value is None:
        return True
    if isinstance(value, BaseModel):
        return False
    if isinstance(value, (str, bytes, list, tuple, dict, set, bool, int, float)):
        return not value
    return False


def _dump(value: Any, key_attr: str) -> Any:
    if isinstance(value, BaseModel):
        return _to_map(value, key_attr)
    if isinstance(value, (list, tuple)):
        return [_dump(item, key_attr) for item in value]
    return value


def _to_map(obj: BaseModel, key_attr: str) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for desc in field_table(type(obj)):
        value = getattr(obj, desc.attr)
        if desc.inline:
            if value is not None:
                result.update(_to_map(value, key_attr))
            continue
        key = getattr(desc, key_attr)
        if key is None:
            continue
        if desc.omit_empty and is_empty(value):
            continue
        result[key] = _dump(value, key_attr)
    return result


def to_wire_map(obj: BaseModel) -> Dict[str, Any]:
    """Serialize the wire-annotated fields of ``obj`` into an API payload"""
    return _to_map(obj, "wire_key")


def to_config_map(obj: BaseModel) -> Dict[str, Any]:
    """
    Serialize the config-annotated fields of ``obj``.

    Strict allow-list: a field without a config key never appears here, even
    when it is populated.
    """
    return _to_map(obj, "config_key")


def from_map(mapping: Dict[str, Any], obj: BaseModel) -> BaseModel:
    """
    Populate ``obj`` in place from a decoded API mapping keyed by wire keys.

    Keys that are absent or null leave the attribute untouched. Values are
    validated strictly against the field type; a mismatch raises
    FieldDecodeError instead of being coerced.
    """
    if not isinstance(mapping, dict):
        raise FieldDecodeError(f"Failed to unmarshal map: expected object, got {type(mapping).__name__}")

    for desc in field_table(type(obj)):
        if desc.inline:
            target = getattr(obj, desc.attr)
            if target is None:
                target = desc.model()
                setattr(obj, desc.attr, target)
            from_map(mapping, target)
            continue
        if desc.wire_key is None or mapping.get(desc.wire_key) is None:
            continue

        value = mapping[desc.wire_key]
        if desc.model is not None:
            if not isinstance(value, dict):
                raise FieldDecodeError(
                    f"Failed to unmarshal map: {desc.wire_key} must be an object, got {type(value).__name__}"
                )
            value = from_map(value, desc.model())
        else:
            try:
                value = desc.adapter.validate_python(value, strict=True)
            except ValidationError as e:
                raise FieldDecodeError(f"Failed to unmarshal map: {desc.wire_key}: {e}") from e
        setattr(obj, desc.attr, value)

    return obj


def flatten(nested: Any) -> Dict[str, Any]:
    """
    Merge nested mappings into one flat mapping.

    Nested keys are assumed unique across levels; on a collision the value
    seen last wins.
    """
    if not isinstance(nested, dict):
        raise TypeError("Not a valid input, must be a map")

    flat: Dict[str, Any] = {}
    for key, value in nested.items():
        if isinstance(value, dict):
            flat.update(flatten(value))
        else:
            flat[key] = value
    return flat


__all__ = [
    "FieldDescriptor",
    "wire_field",
    "field_table",
    "is_empty",
    "to_wire_map",
    "to_config_map",
    "from_map",
    "flatten",
]
