"""Introspection response parser.

Validates a JSON introspection response with pydantic models and
converts it into a GqlDocument. Type references arrive already resolved
by the server, so nullability is a direct recursive unwrap of `ofType`.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    model_validator,
)

from .errors import SchemaParseError
from .ir import (
    BUILT_IN_SCALARS,
    Argument,
    Enum,
    EnumType,
    Function,
    GqlDocument,
    GqlType,
    ListType,
    Object,
    ObjectType,
    Scalar,
    wrap_nullable,
)
from .ir import Field as IRField


class _IntrospectionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class _StrictableModel(_IntrospectionModel):
    """Model that rejects unknown keys when validated in strict mode.

    Strict mode is requested through the validation context:
        Model.model_validate_json(text, context={"strict": True})
    """

    @model_validator(mode="before")
    @classmethod
    def _reject_unknown_keys(cls, data: Any, info: ValidationInfo) -> Any:
        if not (info.context or {}).get("strict") or not isinstance(data, dict):
            return data
        known = set()
        for name, field_info in cls.model_fields.items():
            known.add(field_info.alias or name)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unrecognized field(s): {', '.join(unknown)}")
        return data


# Type references


class NamedTypeRef(_IntrospectionModel):
    kind: Literal["SCALAR", "ENUM", "OBJECT", "INPUT_OBJECT"]
    name: str


class ListTypeRef(_IntrospectionModel):
    kind: Literal["LIST"]
    of_type: "TypeRef" = Field(alias="ofType")


class NonNullTypeRef(_IntrospectionModel):
    kind: Literal["NON_NULL"]
    of_type: "TypeRef" = Field(alias="ofType")


TypeRef = Annotated[
    Union[NamedTypeRef, ListTypeRef, NonNullTypeRef],
    Field(discriminator="kind"),
]

ListTypeRef.model_rebuild()
NonNullTypeRef.model_rebuild()


# Type records


class InputValue(_StrictableModel):
    name: str
    type: TypeRef


class FieldRecord(_StrictableModel):
    name: str
    args: list[InputValue]
    type: TypeRef


class EnumValue(_StrictableModel):
    name: str


class ObjectRecord(_IntrospectionModel):
    kind: Literal["OBJECT"]
    name: str
    fields: list[FieldRecord]


class InputObjectRecord(_IntrospectionModel):
    kind: Literal["INPUT_OBJECT"]
    name: str
    input_fields: list[InputValue] = Field(alias="inputFields")


class EnumRecord(_IntrospectionModel):
    kind: Literal["ENUM"]
    name: str
    enum_values: list[EnumValue] = Field(alias="enumValues")


class ScalarRecord(_IntrospectionModel):
    kind: Literal["SCALAR"]
    name: str


class InterfaceRecord(_IntrospectionModel):
    kind: Literal["INTERFACE"]


class UnionRecord(_IntrospectionModel):
    kind: Literal["UNION"]


TypeRecord = Annotated[
    Union[
        ObjectRecord,
        InterfaceRecord,
        EnumRecord,
        InputObjectRecord,
        ScalarRecord,
        UnionRecord,
    ],
    Field(discriminator="kind"),
]


class SchemaRecord(_StrictableModel):
    types: list[TypeRecord]


class SchemaData(_StrictableModel):
    schema_: SchemaRecord = Field(alias="__schema")


class IntrospectionResponse(_StrictableModel):
    data: SchemaData


# Conversion


def to_gql_type(type_ref: NamedTypeRef | ListTypeRef | NonNullTypeRef, is_nullable: bool = True) -> GqlType:
    """Convert a type reference into a GqlType."""
    if isinstance(type_ref, NonNullTypeRef):
        return to_gql_type(type_ref.of_type, False)
    if isinstance(type_ref, ListTypeRef):
        return wrap_nullable(ListType(to_gql_type(type_ref.of_type, True)), is_nullable)
    if isinstance(type_ref, NamedTypeRef):
        if type_ref.kind == "SCALAR":
            inner = Scalar(type_ref.name)
        elif type_ref.kind == "ENUM":
            inner = EnumType(type_ref.name)
        else:
            inner = ObjectType(type_ref.name)
        return wrap_nullable(inner, is_nullable)
    raise TypeError(f"Unexpected type reference: {type_ref!r}")


def type_ref_name(type_ref: NamedTypeRef | ListTypeRef | NonNullTypeRef) -> str:
    """Render a type reference in SDL notation, e.g. "[ID!]!"."""
    if isinstance(type_ref, NonNullTypeRef):
        return f"{type_ref_name(type_ref.of_type)}!"
    if isinstance(type_ref, ListTypeRef):
        return f"[{type_ref_name(type_ref.of_type)}]"
    return type_ref.name


def _to_output_object(record: ObjectRecord) -> Object:
    fields = []
    for field in record.fields:
        field_type = to_gql_type(field.type)
        if field.args:
            args = tuple(
                Argument(
                    name=arg.name,
                    argument_type=to_gql_type(arg.type),
                    type_name=type_ref_name(arg.type),
                )
                for arg in field.args
            )
            field_type = Function(inputs=args, output=field_type)
        fields.append(IRField(name=field.name, field_type=field_type))
    return Object(name=record.name, fields=tuple(fields))


def _to_input_object(record: InputObjectRecord) -> Object:
    fields = tuple(
        IRField(name=field.name, field_type=to_gql_type(field.type))
        for field in record.input_fields
    )
    return Object(name=record.name, fields=fields)


def _format_validation_error(error: ValidationError) -> tuple[str, list[str]]:
    paths = []
    lines = []
    for detail in error.errors():
        path = ".".join(str(part) for part in detail["loc"]) or "<root>"
        paths.append(path)
        lines.append(f"  {path}: {detail['msg']}")
    return "Invalid introspection response:\n" + "\n".join(lines), paths


def from_introspection_response(response_body: str | bytes, strict: bool = False) -> GqlDocument:
    """Build a GqlDocument from an introspection response body.

    Args:
        response_body: JSON text shaped as {"data": {"__schema": {"types": [...]}}}
        strict: Reject unrecognized keys on the response envelope and on
            field, argument and enum value records.

    Raises:
        SchemaParseError: The body is not JSON or does not match the
            expected shape.
    """
    try:
        response = IntrospectionResponse.model_validate_json(
            response_body, context={"strict": strict}
        )
    except ValidationError as e:
        message, paths = _format_validation_error(e)
        raise SchemaParseError(message, paths) from e

    inputs: list[Object] = []
    outputs: list[Object] = []
    enums: list[Enum] = []
    scalars: dict[str, None] = dict.fromkeys(BUILT_IN_SCALARS)

    for record in response.data.schema_.types:
        if isinstance(record, ObjectRecord):
            outputs.append(_to_output_object(record))
        elif isinstance(record, InputObjectRecord):
            inputs.append(_to_input_object(record))
        elif isinstance(record, EnumRecord):
            enums.append(Enum(name=record.name, values=tuple(v.name for v in record.enum_values)))
        elif isinstance(record, ScalarRecord):
            scalars.setdefault(record.name)
        # Interfaces and unions are dropped

    return GqlDocument(
        inputs=tuple(inputs),
        outputs=tuple(outputs),
        enums=tuple(enums),
        scalars=tuple(scalars),
    )
