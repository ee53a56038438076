"""Declarative input shapes for catalog tools.

A :class:`Shape` is plain data describing the arguments a tool accepts. It
is published to callers as JSON Schema (:meth:`Shape.to_json_schema`) and
turned into a Pydantic model (:meth:`Shape.to_model`) so the dispatcher can
validate every call with a real schema validator instead of ad-hoc checks
inside each generator.
"""

from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, create_model

FieldKind = Literal["string", "number", "boolean", "enum", "array", "object", "mapping"]


# ---------------------------------------------------------------------------
# Shape model
# ---------------------------------------------------------------------------


class FieldSpec(BaseModel):
    """Declaration of one argument.

    ``enum_values`` applies to ``kind="enum"``; ``items`` describes array
    elements; ``shape`` describes ``kind="object"``. ``mapping`` is a free-form
    ``string -> string`` object.
    """

    model_config = ConfigDict(frozen=True)

    kind: FieldKind
    description: str = ""
    required: bool = False
    enum_values: Optional[tuple[str, ...]] = None
    items: Optional["FieldSpec"] = None
    shape: Optional["Shape"] = None
    default: Any = None
    min_items: Optional[int] = None

    def to_json_schema(self) -> dict[str, Any]:
        if self.kind == "object":
            schema = self.shape.to_json_schema() if self.shape else {"type": "object"}
        elif self.kind == "mapping":
            schema = {"type": "object", "additionalProperties": {"type": "string"}}
        elif self.kind == "enum":
            schema = {"type": "string", "enum": list(self.enum_values or ())}
        elif self.kind == "array":
            schema = {"type": "array"}
            if self.items is not None:
                schema["items"] = self.items.to_json_schema()
            if self.min_items is not None:
                schema["minItems"] = self.min_items
        else:
            schema = {"type": self.kind}

        if self.description:
            schema["description"] = self.description
        if self.default is not None:
            schema["default"] = self.default
        return schema

    def annotation(self, model_name: str) -> Any:
        """Python type used to validate this field."""
        if self.kind == "string":
            return str
        if self.kind == "number":
            return float
        if self.kind == "boolean":
            return bool
        if self.kind == "enum":
            return Literal[tuple(self.enum_values or ())]
        if self.kind == "mapping":
            return dict[str, str]
        if self.kind == "object":
            if self.shape is None:
                return dict[str, Any]
            return self.shape.to_model(model_name)
        # array
        item = self.items.annotation(f"{model_name}Item") if self.items else Any
        if self.min_items is not None:
            return Annotated[list[item], Field(min_length=self.min_items)]
        return list[item]


class Shape(BaseModel):
    """Ordered mapping of argument name to :class:`FieldSpec`."""

    model_config = ConfigDict(frozen=True)

    fields: dict[str, FieldSpec] = Field(default_factory=dict)

    def required_fields(self) -> list[str]:
        return [name for name, spec in self.fields.items() if spec.required]

    def optional_fields(self) -> list[str]:
        return [name for name, spec in self.fields.items() if not spec.required]

    def to_json_schema(self) -> dict[str, Any]:
        """Render as a JSON Schema ``object`` (the MCP ``inputSchema`` format)."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {
                name: spec.to_json_schema() for name, spec in self.fields.items()
            },
        }
        required = self.required_fields()
        if required:
            schema["required"] = required
        return schema

    def to_model(self, model_name: str) -> type[BaseModel]:
        """Build a Pydantic model that validates arguments against this shape.

        Required fields have no default. Optional fields fall back to the
        declared ``default`` (or ``None``). Unknown keys are ignored.
        """
        definitions: dict[str, Any] = {}
        for name, spec in self.fields.items():
            annotation = spec.annotation(f"{model_name}{to_pascal(name)}")
            if spec.required:
                definitions[name] = (annotation, ...)
            else:
                definitions[name] = (Optional[annotation], spec.default)
        return create_model(
            model_name,
            __config__=ConfigDict(extra="ignore"),
            **definitions,
        )


FieldSpec.model_rebuild()
Shape.model_rebuild()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def string(description: str = "", *, required: bool = False, default: str | None = None) -> FieldSpec:
    return FieldSpec(kind="string", description=description, required=required, default=default)


def boolean(description: str = "", *, required: bool = False, default: bool | None = None) -> FieldSpec:
    return FieldSpec(kind="boolean", description=description, required=required, default=default)


def enum(
    values: tuple[str, ...] | list[str],
    description: str = "",
    *,
    required: bool = False,
    default: str | None = None,
) -> FieldSpec:
    return FieldSpec(
        kind="enum",
        enum_values=tuple(values),
        description=description,
        required=required,
        default=default,
    )


def array(
    items: FieldSpec,
    description: str = "",
    *,
    required: bool = False,
    min_items: int | None = None,
) -> FieldSpec:
    return FieldSpec(
        kind="array", items=items, description=description, required=required, min_items=min_items
    )


def obj(shape: Shape, description: str = "", *, required: bool = False) -> FieldSpec:
    return FieldSpec(kind="object", shape=shape, description=description, required=required)


def mapping(description: str = "", *, required: bool = False) -> FieldSpec:
    return FieldSpec(kind="mapping", description=description, required=required)


def shape(**fields: FieldSpec) -> Shape:
    """Build a :class:`Shape`; keyword order is the declared field order."""
    return Shape(fields=fields)


def to_pascal(name: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``someThing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", name)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)
