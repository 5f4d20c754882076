"""
Tests for the command line entry points
"""

from click.testing import CliRunner

from feedgraph.cli import cli


def test_schema_prints_sdl():
    result = CliRunner().invoke(cli, ["schema"])

    assert result.exit_code == 0, result.output
    assert "type Mutation {" in result.output
    assert "subscribeTo(userId: UUID!, authorId: UUID!): String" in result.output


def test_schema_writes_file(tmp_path):
    target = tmp_path / "schema.graphql"

    result = CliRunner().invoke(cli, ["schema", "--output", str(target)])

    assert result.exit_code == 0, result.output
    assert "type Query {" in target.read_text()
