"""TypeScript code generator for GraphQL schemas.

Walks a GqlDocument and produces three files in the output directory:

    schema.ts  - scalar registry shape, enums and structural object types
    codec.ts   - SchemaCodec class with encoders/decoders per object
    index.ts   - bootstrap module, rendered once from a Jinja2 template

schema.ts and codec.ts are hash-gated (see writer.py); index.ts is only
created when missing.

Supports a custom bootstrap template via the template_dir parameter:
    generator = CodeGenerator(document, output_dir, template_dir="./my_templates")
"""

import asyncio
from pathlib import Path
from typing import Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .code_writer import CodeFile, CodeFileOptions
from .errors import UnsupportedConstruct
from .ir import (
    EnumType,
    Function,
    GqlDocument,
    GqlType,
    ListType,
    Nullable,
    Object,
    ObjectType,
    Scalar,
    object_target,
)
from .writer import FileWriteResult, ensure_directory, overwrite_on_diff, write_once

DEFAULT_RUNTIME_PACKAGE = "graphql-freeze"

SCHEMA_FILE = "schema.ts"
CODEC_FILE = "codec.ts"
INDEX_FILE = "index.ts"
INDEX_TEMPLATE = "index.ts.j2"


def type_to_code(gql_type: GqlType) -> str:
    """Render a GqlType as a schema.ts type expression."""
    if isinstance(gql_type, ListType):
        return f"QList<{type_to_code(gql_type.inner)}>"
    if isinstance(gql_type, Nullable):
        return f"QNull<{type_to_code(gql_type.inner)}>"
    if isinstance(gql_type, Scalar):
        return f'QScalar<"{gql_type.name}">'
    if isinstance(gql_type, EnumType):
        return f"QEnum<{gql_type.name}>"
    if isinstance(gql_type, ObjectType):
        return f'QObject<"{gql_type.name}">'
    if isinstance(gql_type, Function):
        params = []
        for arg in gql_type.inputs:
            optional = "?" if isinstance(arg.argument_type, Nullable) else ""
            params.append(f"{arg.name}{optional}: {type_to_code(arg.argument_type)}")
        return f"QFun<{{ {', '.join(params)} }}, {type_to_code(gql_type.output)}>"
    raise TypeError(f"Unhandled GqlType: {gql_type!r}")


def encode_to_code(gql_type: GqlType) -> str:
    """Build the expression encoding `value` of the given type."""
    if isinstance(gql_type, Nullable):
        return f"encodeNull(value, value => {encode_to_code(gql_type.inner)})"
    if isinstance(gql_type, ListType):
        return f"encodeList(value, value => {encode_to_code(gql_type.inner)})"
    if isinstance(gql_type, EnumType):
        return "value"
    if isinstance(gql_type, Scalar):
        return f"this.scalars.{gql_type.name}.encode(value)"
    if isinstance(gql_type, ObjectType):
        return f"encodeObject(value, this.{gql_type.name})"
    if isinstance(gql_type, Function):
        raise UnsupportedConstruct("Unable to encode a function typed value")
    raise TypeError(f"Unhandled GqlType: {gql_type!r}")


def decode_to_code(gql_type: GqlType) -> str:
    """Build the expression decoding `value` of the given type."""
    if isinstance(gql_type, Nullable):
        return f"decodeNull(value, value => {decode_to_code(gql_type.inner)})"
    if isinstance(gql_type, ListType):
        return f"decodeList(value, value => {decode_to_code(gql_type.inner)})"
    if isinstance(gql_type, EnumType):
        return "value"
    if isinstance(gql_type, Scalar):
        return f"this.scalars.{gql_type.name}.decode(value)"
    if isinstance(gql_type, ObjectType):
        return f"decodeObject(value, this.{gql_type.name})"
    if isinstance(gql_type, Function):
        return decode_to_code(gql_type.output)
    raise TypeError(f"Unhandled GqlType: {gql_type!r}")


class CodeGenerator:
    """Generates TypeScript client files from a GqlDocument.

    Example:
        generator = CodeGenerator(
            document,
            output_dir="./src/generated",
            options=CodeFileOptions(indent="\\t", line_break="\\n"),
            runtime="graphql-freeze",
        )
        results = asyncio.run(generator.generate())
    """

    def __init__(
        self,
        document: GqlDocument,
        output_dir: str | Path,
        options: Optional[CodeFileOptions] = None,
        runtime: str = DEFAULT_RUNTIME_PACKAGE,
        template_dir: Optional[str] = None,
    ):
        """Initialize the code generator.

        Args:
            document: The intermediate representation of the schema
            output_dir: Directory where generated code will be written
            options: Indent and line terminator for generated files
            runtime: Runtime package imported by generated code
            template_dir: Optional directory with a custom index.ts.j2.
                          Templates here override the built-in template.
        """
        self.document = document
        self.output_dir = Path(output_dir)
        self.options = options or CodeFileOptions()
        self.runtime = runtime

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_freeze", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            keep_trailing_newline=True,
        )

    def generate_schema(self) -> str:
        """Render schema.ts (without the hash header)."""
        file = CodeFile(self.options)
        file.line(f'import {{ Scalar }} from "{self.runtime}"')
        file.line(f'import {{ QFun, QList, QNull, QObject, QScalar, QEnum }} from "{self.runtime}"')
        file.blank_line()

        file.begin_indent("export interface Scalars {")
        for scalar in self.document.scalars:
            file.line(f"{scalar}: Scalar<unknown, unknown>")
        file.end_indent("}")

        file.blank_line()
        file.begin_indent("export function createScalars<T extends Scalars>(scalars: T): T {")
        file.line("return scalars")
        file.end_indent("}")

        for enum_def in self.document.enums:
            file.blank_line()
            file.begin_indent(f"export enum {enum_def.name} {{")
            for member in enum_def.values:
                file.line(f'{member} = "{member}",')
            file.end_indent("}")

        if self.document.outputs:
            self._write_object_schema(file, "ObjectSchema", self.document.outputs)
            file.blank_line()
        if self.document.inputs:
            self._write_object_schema(file, "InputObjectSchema", self.document.inputs)
        return file.build_string()

    @staticmethod
    def _write_object_schema(file: CodeFile, type_name: str, objects: tuple[Object, ...]):
        file.begin_indent(f"export type {type_name} = {{")
        for obj in objects:
            file.begin_indent(f"{obj.name}: {{")
            for field in obj.fields:
                file.line(f"{field.name}: {type_to_code(field.field_type)}")
            file.end_indent("}")
        file.end_indent("}")

    def generate_codec(self) -> str:
        """Render codec.ts (without the hash header)."""
        file = CodeFile(self.options)
        file.line('import { Scalars } from "./index"')
        file.line(
            "import { Codec, Encoder, decodeNull, decodeList, decodeObject, "
            f'encodeNull, encodeList, encodeObject }} from "{self.runtime}"'
        )
        file.blank_line()

        file.begin_indent("export class SchemaCodec {")
        file.begin_indent("public constructor(")
        file.line("private readonly scalars: Scalars,")
        file.end_indent(") { }")
        file.blank_line()

        for obj in self.document.inputs:
            file.begin_indent(f"public {obj.name}: Encoder = {{")
            for field in obj.fields:
                file.line(f"{field.name}: (value) => {encode_to_code(field.field_type)},")
            file.end_indent("}")

        for obj in self.document.outputs:
            file.begin_indent(f"public {obj.name}: Codec = {{")
            for field in obj.fields:
                self._write_codec_field(file, field.name, field.field_type)
            file.end_indent("}")

        file.end_indent("}")
        return file.build_string()

    @staticmethod
    def _write_codec_field(file: CodeFile, name: str, field_type: GqlType):
        file.begin_indent(f"{name}: {{")
        target = object_target(field_type)
        if target is not None:
            # Resolved on call, so objects may reference each other in cycles
            file.line(f"codec: () => this.{target},")
        file.line(f"decode: (value) => {decode_to_code(field_type)},")
        if isinstance(field_type, Function):
            file.begin_indent("args: {")
            for arg in field_type.inputs:
                file.begin_indent(f"{arg.name}: {{")
                file.line(f'type: "{arg.type_name}",')
                file.line(f"encode: (value) => {encode_to_code(arg.argument_type)},")
                file.end_indent("},")
            file.end_indent("}")
        file.end_indent("},")

    def render_index(self) -> str:
        """Render the bootstrap index.ts from its template."""
        template = self.env.get_template(INDEX_TEMPLATE)
        content = template.render(runtime=self.runtime, indent=self.options.indent)
        return content.replace("\n", self.options.line_break)

    async def generate(self) -> dict[str, FileWriteResult]:
        """Write all files concurrently.

        Returns:
            Mapping of file name to its write outcome
        """
        ensure_directory(self.output_dir)
        line_break = self.options.line_break

        async def write_index():
            return await asyncio.to_thread(
                write_once, self.output_dir / INDEX_FILE, self.render_index()
            )

        async def write_schema():
            content = self.generate_schema()
            return await asyncio.to_thread(
                overwrite_on_diff, self.output_dir / SCHEMA_FILE, content, line_break
            )

        async def write_codec():
            content = self.generate_codec()
            return await asyncio.to_thread(
                overwrite_on_diff, self.output_dir / CODEC_FILE, content, line_break
            )

        results = await asyncio.gather(write_index(), write_schema(), write_codec())
        return dict(zip((INDEX_FILE, SCHEMA_FILE, CODEC_FILE), results))
