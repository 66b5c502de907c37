from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Literal

Kind = Literal["null","bool","number","string","array","object"]

def kind_of(value: Any) -> Kind:
    if value is None: return "null"
    if isinstance(value, bool): return "bool"
    if isinstance(value, (int, float)): return "number"
    if isinstance(value, str): return "string"
    if isinstance(value, list): return "array"
    if isinstance(value, dict): return "object"
    raise ValueError(f"Unknown kind for {type(value)}")

@dataclass
class Schema:
    type: Kind | None = None
    properties: dict[str, "Schema"] | None = None
    required: set[str] | None = None
    non_empty: bool = False

def validate(schema: Schema, value: Any, path: str = "$") -> None:
    from .errors import ConfigError
    if schema.type and kind_of(value) != schema.type:
        raise ConfigError(f"Expected {schema.type} got {kind_of(value)} at {path}", path)
    if schema.non_empty and schema.type == "string" and not value.strip():
        raise ConfigError(f"Expected a non-empty string at {path}", path)
    if schema.type == "object" and schema.properties is not None:
        props = schema.properties
        for r in sorted(schema.required or set()):
            if r not in value:
                raise ConfigError(f"Missing required field {r} at {path}", path)
        for k, sub in props.items():
            if k in value:
                validate(sub, value[k], f"{path}.{k}")

# Only output.directory is consumed; everything else passes through.
BOOK_CONFIG_SCHEMA = Schema(
    type="object",
    required={"output"},
    properties={
        "output": Schema(
            type="object",
            required={"directory"},
            properties={"directory": Schema(type="string", non_empty=True)},
        ),
    },
)
