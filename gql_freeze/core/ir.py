"""Intermediate Representation (IR) for GraphQL schemas.

This module defines the nullability-resolved type model shared by both
ingestion paths and consumed by the code generator. Everything here is
immutable: a document is built once and only read afterwards.
"""

from dataclasses import dataclass, field

BUILT_IN_SCALARS = ("Int", "String", "Float", "Boolean", "ID")


class GqlType:
    """Base class of the closed GqlType hierarchy.

    Concrete variants: Scalar, EnumType, ObjectType, ListType,
    Nullable and Function. Consumers dispatch with isinstance and
    raise TypeError for anything else.
    """

    __slots__ = ()


@dataclass(frozen=True)
class Scalar(GqlType):
    """Opaque primitive identified by name."""
    name: str


@dataclass(frozen=True)
class EnumType(GqlType):
    """Reference to a named enumeration."""
    name: str


@dataclass(frozen=True)
class ObjectType(GqlType):
    """Reference to a named input or output object."""
    name: str


@dataclass(frozen=True)
class ListType(GqlType):
    """Ordered sequence of `inner`."""
    inner: GqlType


@dataclass(frozen=True)
class Nullable(GqlType):
    """Marks `inner` as possibly null. Bare types are never null."""
    inner: GqlType

    def __post_init__(self):
        if isinstance(self.inner, Nullable):
            raise ValueError(f"Nullable cannot wrap another Nullable: {self.inner!r}")


@dataclass(frozen=True)
class Argument:
    """Represents an argument to a field."""
    name: str
    argument_type: GqlType
    # Declared signature, e.g. "[ID!]!", used verbatim in codec metadata
    type_name: str


@dataclass(frozen=True)
class Function(GqlType):
    """A field that takes arguments."""
    inputs: tuple[Argument, ...]
    output: GqlType


@dataclass(frozen=True)
class Field:
    """Represents a field in an input or output object."""
    name: str
    field_type: GqlType


@dataclass(frozen=True)
class Object:
    """Represents a GraphQL object type or input object type."""
    name: str
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Enum:
    """Represents a GraphQL enum type."""
    name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class GqlDocument:
    """Complete intermediate representation of a GraphQL schema."""
    inputs: tuple[Object, ...] = ()
    outputs: tuple[Object, ...] = ()
    enums: tuple[Enum, ...] = ()
    # Ordered and duplicate-free
    scalars: tuple[str, ...] = field(default=BUILT_IN_SCALARS)


def nullable(inner: GqlType) -> Nullable:
    """Wrap `inner` in Nullable, collapsing an existing wrapper."""
    if isinstance(inner, Nullable):
        return inner
    return Nullable(inner)


def wrap_nullable(inner: GqlType, is_nullable: bool) -> GqlType:
    """Apply the ambient nullability of a type position to `inner`."""
    return nullable(inner) if is_nullable else inner


def object_target(gql_type: GqlType) -> str | None:
    """Return the object name a type ultimately points at, if any.

    Nullable, List and Function layers are looked through; scalars
    and enums have no target.
    """
    if isinstance(gql_type, (Nullable, ListType)):
        return object_target(gql_type.inner)
    if isinstance(gql_type, Function):
        return object_target(gql_type.output)
    if isinstance(gql_type, ObjectType):
        return gql_type.name
    if isinstance(gql_type, (Scalar, EnumType)):
        return None
    raise TypeError(f"Unhandled GqlType: {gql_type!r}")
