"""Configuration file for gql-freeze.

The configuration is a JSON file (graphql-freeze.json by default):

    {
        "profiles": {
            "default": {"method": "Endpoint", "url": "https://example.com/graphql"},
            "local": {"method": "File", "path": "schema.graphql"}
        },
        "output": "src/generated",
        "indent": "    ",
        "lineBreak": "\\n",
        "runtime": "graphql-freeze"
    }

Profile methods decide both where the schema comes from and how it is
read: Endpoint and PipeResponse deliver an introspection response,
File and PipeSdl deliver SDL.
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from .core.code_writer import CodeFileOptions
from .core.errors import ConfigError
from .core.generator import DEFAULT_RUNTIME_PACKAGE

DEFAULT_CONFIG_FILE = "graphql-freeze.json"
DEFAULT_PROFILE = "default"
DEFAULT_INDENT = "    "


class ProcessMethod(Enum):
    """How raw schema text is interpreted."""
    SDL = "sdl"
    INTROSPECTION = "introspection"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class EndpointProfile(_ConfigModel):
    method: Literal["Endpoint"]
    url: str
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def process(self) -> ProcessMethod:
        return ProcessMethod.INTROSPECTION


class FileProfile(_ConfigModel):
    method: Literal["File"]
    path: str

    @property
    def process(self) -> ProcessMethod:
        return ProcessMethod.SDL


class PipeResponseProfile(_ConfigModel):
    method: Literal["PipeResponse"]

    @property
    def process(self) -> ProcessMethod:
        return ProcessMethod.INTROSPECTION


class PipeSdlProfile(_ConfigModel):
    method: Literal["PipeSdl"]

    @property
    def process(self) -> ProcessMethod:
        return ProcessMethod.SDL


Profile = Annotated[
    Union[EndpointProfile, FileProfile, PipeResponseProfile, PipeSdlProfile],
    Field(discriminator="method"),
]


class FreezeConfig(_ConfigModel):
    """Parsed configuration file."""
    model_config = ConfigDict(frozen=False)

    profiles: dict[str, Profile]
    output: str
    line_break: str = Field(default=os.linesep, alias="lineBreak")
    indent: str = DEFAULT_INDENT
    runtime: str = DEFAULT_RUNTIME_PACKAGE
    # Directory relative paths are resolved against
    _base_dir: Path = PrivateAttr(default_factory=Path.cwd)

    def get_profile(self, name: str) -> EndpointProfile | FileProfile | PipeResponseProfile | PipeSdlProfile:
        """Return the named profile or raise ConfigError."""
        try:
            return self.profiles[name]
        except KeyError:
            available = ", ".join(sorted(self.profiles)) or "none"
            raise ConfigError(f'No profile named "{name}" (available: {available})') from None

    @property
    def output_directory(self) -> Path:
        return self.resolve_path(self.output)

    @property
    def code_file_options(self) -> CodeFileOptions:
        return CodeFileOptions(indent=self.indent, line_break=self.line_break)

    def resolve_path(self, path: str) -> Path:
        """Resolve `path` relative to the configuration file's directory."""
        return (self._base_dir / path).resolve()


def load_config(path: str | Path) -> FreezeConfig:
    """Load and validate a configuration file.

    Raises:
        ConfigError: The file is missing, unreadable, not JSON or invalid.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Unable to read configuration file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Configuration file {path} is not valid JSON: {e.msg} "
            f"(line {e.lineno}, column {e.colno})"
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a JSON object")

    try:
        config = FreezeConfig.model_validate(data)
    except ValidationError as e:
        details = "\n".join(
            f"  {'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid configuration file {path}:\n{details}") from e

    config._base_dir = path.resolve().parent
    return config
