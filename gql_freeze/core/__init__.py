"""Core modules for GraphQL code generation."""

from .code_writer import CodeFile, CodeFileOptions
from .errors import (
    ConfigError,
    FetchError,
    GqlFreezeError,
    IndentationUnderflow,
    OutputWriteError,
    SchemaParseError,
    UnknownTypeReference,
    UnsupportedConstruct,
)
from .fetch import read_endpoint, read_file, read_pipe
from .generator import (
    CodeGenerator,
    decode_to_code,
    encode_to_code,
    type_to_code,
)
from .introspection import from_introspection_response
from .ir import (
    BUILT_IN_SCALARS,
    Argument,
    Enum,
    EnumType,
    Field,
    Function,
    GqlDocument,
    GqlType,
    ListType,
    Nullable,
    Object,
    ObjectType,
    Scalar,
    nullable,
)
from .parser import SchemaParser, from_sdl_string
from .writer import FileWriteResult, overwrite_on_diff, write_once

__all__ = [
    # IR types
    "BUILT_IN_SCALARS",
    "Argument",
    "Enum",
    "EnumType",
    "Field",
    "Function",
    "GqlDocument",
    "GqlType",
    "ListType",
    "Nullable",
    "Object",
    "ObjectType",
    "Scalar",
    "nullable",
    # Errors
    "ConfigError",
    "FetchError",
    "GqlFreezeError",
    "IndentationUnderflow",
    "OutputWriteError",
    "SchemaParseError",
    "UnknownTypeReference",
    "UnsupportedConstruct",
    # Parsers
    "SchemaParser",
    "from_sdl_string",
    "from_introspection_response",
    # Fetch
    "read_endpoint",
    "read_file",
    "read_pipe",
    # Code generation
    "CodeFile",
    "CodeFileOptions",
    "CodeGenerator",
    "decode_to_code",
    "encode_to_code",
    "type_to_code",
    # Writer
    "FileWriteResult",
    "overwrite_on_diff",
    "write_once",
]
