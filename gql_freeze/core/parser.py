"""GraphQL SDL parser using graphql-core.

Parses schema-definition-language text and produces a GqlDocument.
"""

import os

from graphql import (
    EnumTypeDefinitionNode,
    GraphQLSyntaxError,
    InputObjectTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    TypeNode,
    parse,
    print_ast,
)

from .errors import SchemaParseError, UnknownTypeReference
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
    Object,
    ObjectType,
    Scalar,
    wrap_nullable,
)

SCHEMA_FILE_EXTENSIONS = (".graphql", ".graphqls")


class SchemaParser:
    """Parses SDL text into IR.

    SDL allows forward references, so every named definition is
    collected first and field types are only resolved in build().
    Definitions are keyed by name: a later definition with the same
    name replaces an earlier one.
    """

    def __init__(self):
        self.input_definitions: dict[str, InputObjectTypeDefinitionNode] = {}
        self.output_definitions: dict[str, ObjectTypeDefinitionNode] = {}
        self.enums: dict[str, Enum] = {}
        self.scalars: set[str] = set(BUILT_IN_SCALARS)

    def add_sdl(self, sdl: str):
        """Parse SDL text and collect its definitions."""
        try:
            ast = parse(sdl)
        except GraphQLSyntaxError as e:
            locations = [(loc.line, loc.column) for loc in e.locations or []]
            raise SchemaParseError(f"Invalid SDL: {e.message}", locations) from e
        self._process_ast(ast)

    def _process_ast(self, ast):
        """Collect scalar, object, input and enum definitions."""
        # Interfaces, unions, extensions, schema and directive definitions
        # contribute nothing to the document.
        for definition in ast.definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self.scalars.add(definition.name.value)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                self.output_definitions[definition.name.value] = definition
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                self.input_definitions[definition.name.value] = definition
            elif isinstance(definition, EnumTypeDefinitionNode):
                self._process_enum(definition)

    def _process_enum(self, node: EnumTypeDefinitionNode):
        name = node.name.value
        values = tuple(v.name.value for v in node.values or ())
        self.enums[name] = Enum(name=name, values=values)

    def build(self) -> GqlDocument:
        """Resolve all collected definitions into a GqlDocument."""
        inputs = tuple(
            self._to_input_object(self.input_definitions[name])
            for name in sorted(self.input_definitions)
        )
        outputs = tuple(
            self._to_output_object(self.output_definitions[name])
            for name in sorted(self.output_definitions)
        )
        return GqlDocument(
            inputs=inputs,
            outputs=outputs,
            enums=tuple(self.enums[name] for name in sorted(self.enums)),
            scalars=tuple(sorted(self.scalars)),
        )

    def _to_output_object(self, node: ObjectTypeDefinitionNode) -> Object:
        fields = []
        for field_node in node.fields or ():
            field_type = self.to_gql_type(field_node.type)
            if field_node.arguments:
                args = tuple(
                    Argument(
                        name=arg_node.name.value,
                        argument_type=self.to_gql_type(arg_node.type),
                        type_name=print_ast(arg_node.type),
                    )
                    for arg_node in field_node.arguments
                )
                field_type = Function(inputs=args, output=field_type)
            fields.append(Field(name=field_node.name.value, field_type=field_type))
        return Object(name=node.name.value, fields=tuple(fields))

    def _to_input_object(self, node: InputObjectTypeDefinitionNode) -> Object:
        fields = tuple(
            Field(name=field_node.name.value, field_type=self.to_gql_type(field_node.type))
            for field_node in node.fields or ()
        )
        return Object(name=node.name.value, fields=fields)

    def to_gql_type(self, type_node: TypeNode, is_nullable: bool = True) -> GqlType:
        """Resolve a type node against the collected definitions."""
        if isinstance(type_node, NonNullTypeNode):
            return self.to_gql_type(type_node.type, False)
        if isinstance(type_node, ListTypeNode):
            inner = self.to_gql_type(type_node.type, True)
            return wrap_nullable(ListType(inner), is_nullable)
        if isinstance(type_node, NamedTypeNode):
            return wrap_nullable(self._resolve_name(type_node.name.value), is_nullable)
        raise TypeError(f"Unexpected type node: {type(type_node).__name__}")

    def _resolve_name(self, name: str) -> GqlType:
        if name in self.scalars:
            return Scalar(name)
        if name in self.enums:
            return EnumType(name)
        if name in self.input_definitions or name in self.output_definitions:
            return ObjectType(name)
        raise UnknownTypeReference(name)


def collect_schema_files(schema_path: str) -> list[str]:
    """Collect all SDL files from a file or directory path."""
    if os.path.isfile(schema_path):
        return [schema_path]
    files = []
    for root, _, filenames in os.walk(schema_path):
        for filename in filenames:
            if filename.endswith(SCHEMA_FILE_EXTENSIONS):
                files.append(os.path.join(root, filename))
    return sorted(files)


def from_sdl_string(sdl: str) -> GqlDocument:
    """Build a GqlDocument from SDL text."""
    parser = SchemaParser()
    parser.add_sdl(sdl)
    return parser.build()
