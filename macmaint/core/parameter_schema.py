"""Parameter Schema — tagged parameter variants, tool descriptors, argument preparation.

Invariants:
    - Each parameter is exactly one variant: string | number | boolean | enum-array
    - A declared default always passes its own variant's validator (checked at construction)
    - prepare_arguments() fills defaults BEFORE validation and never mutates its input
    - Arguments the descriptor does not declare pass through untouched
    - Explicit null is treated as absent

Design Decisions:
    - Validators live on the variant, not in the dispatcher: the schema is the single
      source of truth for both defaulting and validation
    - bool is rejected where a number is expected (bool subclasses int in Python)
    - NaN and infinities are rejected: handlers convert numbers with int()
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from macmaint.core.domain_types import ParamType
from macmaint.core.errors import InvalidArgumentError


@dataclass(frozen=True)
class ParameterSpec:
    """Base of the parameter variants. Subclasses set param_type and _check()."""

    description: str
    default: Any = None

    param_type = ParamType.STRING

    def __post_init__(self):
        if self.default is not None:
            try:
                self.validate("default", self.default)
            except InvalidArgumentError as e:
                raise ValueError(f"Inconsistent default: {e.message}") from e

    def validate(self, name: str, value: Any) -> None:
        """Raise InvalidArgumentError when value does not fit this variant."""
        self._check(name, value)

    def _check(self, name: str, value: Any) -> None:
        raise NotImplementedError

    def default_value(self) -> Any:
        if isinstance(self.default, (list, tuple)):
            return list(self.default)
        return self.default

    def to_json_schema(self) -> dict:
        schema: dict[str, Any] = {
            "type": self.param_type.value,
            "description": self.description,
        }
        if self.default is not None:
            schema["default"] = self.default_value()
        return schema


@dataclass(frozen=True)
class StringParam(ParameterSpec):
    enum: tuple[str, ...] | None = None

    param_type = ParamType.STRING

    def _check(self, name: str, value: Any) -> None:
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"Argument '{name}' must be a string", field=name,
            )
        if self.enum is not None and value not in self.enum:
            raise InvalidArgumentError(
                f"Argument '{name}' must be one of {list(self.enum)}, got '{value}'",
                field=name,
            )

    def to_json_schema(self) -> dict:
        schema = super().to_json_schema()
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        return schema


@dataclass(frozen=True)
class NumberParam(ParameterSpec):
    param_type = ParamType.NUMBER

    def _check(self, name: str, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidArgumentError(
                f"Argument '{name}' must be a number", field=name,
            )
        if not math.isfinite(value):
            raise InvalidArgumentError(
                f"Argument '{name}' must be a finite number", field=name,
            )


@dataclass(frozen=True)
class BooleanParam(ParameterSpec):
    param_type = ParamType.BOOLEAN

    def _check(self, name: str, value: Any) -> None:
        if not isinstance(value, bool):
            raise InvalidArgumentError(
                f"Argument '{name}' must be a boolean", field=name,
            )


@dataclass(frozen=True)
class EnumArrayParam(ParameterSpec):
    choices: tuple[str, ...] = ()

    param_type = ParamType.ENUM_ARRAY

    def _check(self, name: str, value: Any) -> None:
        if not isinstance(value, (list, tuple)):
            raise InvalidArgumentError(
                f"Argument '{name}' must be an array", field=name,
            )
        bad = [v for v in value if v not in self.choices]
        if bad:
            raise InvalidArgumentError(
                f"Argument '{name}' has values outside {list(self.choices)}: {bad}",
                field=name,
            )

    def to_json_schema(self) -> dict:
        schema = super().to_json_schema()
        schema["items"] = {"type": "string", "enum": list(self.choices)}
        return schema


@dataclass(frozen=True)
class ToolDescriptor:
    """One registry entry. Immutable for the process lifetime."""

    name: str
    description: str
    parameters: Mapping[str, ParameterSpec] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(
            self, "parameters", MappingProxyType(dict(self.parameters)),
        )

    def to_wire(self) -> dict:
        """Discovery shape: name, description, inputSchema (JSON Schema object)."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": {
                "type": "object",
                "properties": {
                    pname: spec.to_json_schema()
                    for pname, spec in self.parameters.items()
                },
            },
        }


def prepare_arguments(
    descriptor: ToolDescriptor, raw_arguments: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Fill declared defaults, then validate every declared argument present."""
    arguments = {
        k: v for k, v in (raw_arguments or {}).items() if v is not None
    }
    for name, spec in descriptor.parameters.items():
        if name not in arguments:
            if spec.default is not None:
                arguments[name] = spec.default_value()
            continue
        spec.validate(name, arguments[name])
    return arguments
