"""Tests for configuration loading."""

import json
import os

import pytest

from gql_freeze.config import (
    EndpointProfile,
    FileProfile,
    PipeResponseProfile,
    PipeSdlProfile,
    ProcessMethod,
    load_config,
)
from gql_freeze.core.errors import ConfigError


@pytest.fixture
def write_config(tmp_path):
    def write(data) -> str:
        path = tmp_path / "graphql-freeze.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return str(path)

    return write


class TestLoadConfig:
    """Tests for load_config."""

    def test_minimal_config_defaults(self, write_config):
        config = load_config(write_config({"profiles": {}, "output": "gen"}))
        assert config.indent == "    "
        assert config.line_break == os.linesep
        assert config.runtime == "graphql-freeze"

    def test_all_profile_methods(self, write_config):
        config = load_config(
            write_config(
                {
                    "profiles": {
                        "default": {"method": "Endpoint", "url": "http://api/graphql"},
                        "file": {"method": "File", "path": "schema.graphql"},
                        "piped": {"method": "PipeResponse"},
                        "pipedSdl": {"method": "PipeSdl"},
                    },
                    "output": "gen",
                    "lineBreak": "\r\n",
                    "indent": "\t",
                    "runtime": "@acme/runtime",
                }
            )
        )
        assert isinstance(config.get_profile("default"), EndpointProfile)
        assert isinstance(config.get_profile("file"), FileProfile)
        assert isinstance(config.get_profile("piped"), PipeResponseProfile)
        assert isinstance(config.get_profile("pipedSdl"), PipeSdlProfile)
        assert config.code_file_options.indent == "\t"
        assert config.code_file_options.line_break == "\r\n"
        assert config.runtime == "@acme/runtime"

    def test_process_methods(self):
        assert EndpointProfile(method="Endpoint", url="u").process is ProcessMethod.INTROSPECTION
        assert PipeResponseProfile(method="PipeResponse").process is ProcessMethod.INTROSPECTION
        assert FileProfile(method="File", path="p").process is ProcessMethod.SDL
        assert PipeSdlProfile(method="PipeSdl").process is ProcessMethod.SDL

    def test_paths_relative_to_config_file(self, write_config, tmp_path):
        config = load_config(write_config({"profiles": {}, "output": "gen"}))
        assert config.output_directory == (tmp_path / "gen").resolve()
        assert config.resolve_path("schema.graphql") == (tmp_path / "schema.graphql").resolve()

    def test_unknown_profile(self, write_config):
        config = load_config(write_config({"profiles": {"a": {"method": "PipeSdl"}}, "output": "x"}))
        with pytest.raises(ConfigError, match='No profile named "missing"'):
            config.get_profile("missing")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Unable to read"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, write_config):
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_config(write_config("{"))

    def test_not_an_object(self, write_config):
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(write_config("[]"))

    def test_missing_output(self, write_config):
        with pytest.raises(ConfigError, match="output"):
            load_config(write_config({"profiles": {}}))

    def test_unknown_method(self, write_config):
        with pytest.raises(ConfigError, match="profiles.x"):
            load_config(write_config({"profiles": {"x": {"method": "Ftp"}}, "output": "g"}))

    def test_unknown_key_rejected(self, write_config):
        with pytest.raises(ConfigError, match="outputDir"):
            load_config(write_config({"profiles": {}, "output": "g", "outputDir": "h"}))

    def test_endpoint_headers(self, write_config):
        config = load_config(
            write_config(
                {
                    "profiles": {
                        "default": {
                            "method": "Endpoint",
                            "url": "http://api",
                            "headers": {"Authorization": "Bearer t"},
                        }
                    },
                    "output": "g",
                }
            )
        )
        assert config.get_profile("default").headers == {"Authorization": "Bearer t"}
