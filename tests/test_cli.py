"""End-to-end tests for the command line."""

import json

import pytest
from click.testing import CliRunner

from gql_freeze.cli import main
from gql_freeze.core.errors import UnsupportedConstruct
from gql_freeze.core.generator import CodeGenerator


@pytest.fixture
def project(tmp_path):
    """A project directory with an SDL schema and a config file."""
    (tmp_path / "schema.graphql").write_text(
        """
        enum Role { ADMIN MEMBER }
        type User { id: ID! role: Role }
        type Query { user(id: ID!): User }
        """
    )
    config = {
        "profiles": {
            "default": {"method": "File", "path": "schema.graphql"},
            "piped": {"method": "PipeResponse"},
            "pipedSdl": {"method": "PipeSdl"},
        },
        "output": "generated",
        "lineBreak": "\n",
    }
    (tmp_path / "graphql-freeze.json").write_text(json.dumps(config))
    return tmp_path


def run(project, *args, input=None):
    runner = CliRunner()
    return runner.invoke(
        main,
        ["generate", "--config", str(project / "graphql-freeze.json"), *args],
        input=input,
    )


class TestGenerateCommand:
    """Tests for `gql-freeze generate`."""

    def test_creates_files(self, project):
        result = run(project)
        assert result.exit_code == 0, result.output
        assert "schema.ts - created" in result.output
        assert "codec.ts - created" in result.output
        assert "index.ts - created" in result.output
        generated = project / "generated"
        assert (generated / "schema.ts").read_text().startswith("// hash:")
        assert "export enum Role {" in (generated / "schema.ts").read_text()
        assert "export class SchemaCodec {" in (generated / "codec.ts").read_text()

    def test_second_run_skips(self, project):
        run(project)
        result = run(project)
        assert result.exit_code == 0, result.output
        assert "schema.ts - skipped (no change)" in result.output
        assert "codec.ts - skipped (no change)" in result.output
        assert "index.ts - already exists" in result.output

    def test_piped_sdl(self, project):
        result = run(project, "--profile", "pipedSdl", input="type Query { ok: Boolean! }")
        assert result.exit_code == 0, result.output
        assert 'ok: QScalar<"Boolean">' in (project / "generated" / "schema.ts").read_text()

    def test_piped_introspection_response(self, project):
        body = json.dumps({"data": {"__schema": {"types": [{"kind": "UNION", "name": "U"}]}}})
        result = run(project, "-p", "piped", input=body)
        assert result.exit_code == 0, result.output
        schema = (project / "generated" / "schema.ts").read_text()
        assert "ObjectSchema" not in schema

    def test_unknown_profile_fails(self, project):
        result = run(project, "--profile", "nope")
        assert result.exit_code == 1
        assert 'No profile named "nope"' in result.output

    def test_missing_config_fails(self, tmp_path):
        result = CliRunner().invoke(
            main, ["generate", "--config", str(tmp_path / "missing.json")]
        )
        assert result.exit_code == 1
        assert "Unable to read configuration file" in result.output

    def test_parse_error_fails(self, project):
        result = run(project, "-p", "pipedSdl", input="type Query {")
        assert result.exit_code == 1
        assert "Invalid SDL" in result.output
        assert not (project / "generated").exists()

    def test_verbose_dumps_unparseable_input(self, project):
        result = run(project, "-p", "pipedSdl", "--verbose", input="type Broken {")
        assert result.exit_code == 1
        assert "type Broken {" in result.output

    def test_unknown_type_fails(self, project):
        result = run(project, "-p", "pipedSdl", input="type Query { a: Missing }")
        assert result.exit_code == 1
        assert "Unknown type Missing" in result.output

    def test_emitter_bug_is_not_reported_as_user_error(self, project, monkeypatch):
        def broken(self):
            raise UnsupportedConstruct("Unable to encode a function typed value")

        monkeypatch.setattr(CodeGenerator, "generate_codec", broken)
        result = run(project)
        assert isinstance(result.exception, UnsupportedConstruct)
        assert "Error:" not in result.output
