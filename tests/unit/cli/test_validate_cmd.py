"""Tests for the validate CLI command."""

import logging
from unittest.mock import patch

import orjson
import pytest
from typer.testing import CliRunner

from ontocheck.cli import app
from ontocheck.config import settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """Keep the CLI's logging setup from leaking into other tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def animals_csv(write_csv):
    return write_csv(
        [["id", "is_a"], ["Dog", "Animal"], ["Dog", "Plant"], ["Unicorn", "Animal"]],
        name="animals.csv",
    )


def invoke(*args: str):
    return runner.invoke(app, ["--log-level", "WARNING", "validate", *args])


class TestValidateCommand:
    """Test the validate command end to end."""

    def test_invalid_input_to_file(self, animals_csv, zoo_ttl, tmp_path) -> None:
        out = tmp_path / "report.txt"

        result = invoke(
            "--csv", str(animals_csv), "--owl", str(zoo_ttl),
            "--validate", "id", "--ancestor", "is_a", "--output", str(out),
        )

        assert result.exit_code == 0
        lines = out.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("Line 3: INVALID:")
        assert lines[1].startswith("Line 4: UNRESOLVABLE:")
        assert lines[-1] == "Argh! The input was not valid!"

    def test_valid_input_to_stdout(self, write_csv, zoo_ttl) -> None:
        csv_path = write_csv([["id", "is_a"], ["Dog", "Animal"], ["Rex", "mammal"]])

        result = invoke("-c", str(csv_path), "-w", str(zoo_ttl), "-l", "id", "-a", "is_a")

        assert result.exit_code == 0
        assert "The input was valid!" in result.output
        assert "INVALID" not in result.output

    def test_fail_on_invalid(self, animals_csv, zoo_ttl, tmp_path) -> None:
        result = invoke(
            "-c", str(animals_csv), "-w", str(zoo_ttl), "-l", "id", "-a", "is_a",
            "-o", str(tmp_path / "out.txt"), "--fail-on-invalid",
        )
        assert result.exit_code == 1

    def test_json_format(self, animals_csv, zoo_ttl, tmp_path) -> None:
        out = tmp_path / "report.json"

        result = invoke(
            "-c", str(animals_csv), "-w", str(zoo_ttl), "-l", "id", "-a", "is_a",
            "-o", str(out), "--format", "json",
        )

        assert result.exit_code == 0
        data = orjson.loads(out.read_bytes())
        assert data["valid"] is False
        assert [row["status"] for row in data["rows"]] == ["valid", "invalid", "unresolvable"]

    def test_format_from_settings(self, animals_csv, zoo_ttl, tmp_path, monkeypatch) -> None:
        monkeypatch.setattr(settings, "output_format", "json")
        out = tmp_path / "report.json"

        result = invoke(
            "-c", str(animals_csv), "-w", str(zoo_ttl), "-l", "id", "-a", "is_a", "-o", str(out),
        )

        assert result.exit_code == 0
        assert orjson.loads(out.read_bytes())["summary"]["total"] == 3

    def test_unsupported_format(self, animals_csv, zoo_ttl) -> None:
        result = invoke(
            "-c", str(animals_csv), "-w", str(zoo_ttl), "-l", "id", "-a", "is_a", "-f", "xml",
        )
        assert result.exit_code == 2

    def test_missing_column_is_fatal(self, animals_csv, zoo_ttl, tmp_path) -> None:
        out = tmp_path / "report.txt"

        result = invoke(
            "-c", str(animals_csv), "-w", str(zoo_ttl), "-l", "id", "-a", "parent",
            "-o", str(out),
        )

        assert result.exit_code == 1
        assert not out.exists()
        assert "ColumnNotFound" in result.output

    def test_unparseable_ontology_is_fatal(self, animals_csv, tmp_path) -> None:
        broken = tmp_path / "broken.ttl"
        broken.write_text("not turtle <<<", encoding="utf-8")

        result = invoke("-c", str(animals_csv), "-w", str(broken), "-l", "id", "-a", "is_a")

        assert result.exit_code == 1
        assert "OntologyLoadError" in result.output

    def test_missing_csv_file(self, zoo_ttl, tmp_path) -> None:
        result = invoke(
            "-c", str(tmp_path / "nope.csv"), "-w", str(zoo_ttl), "-l", "id", "-a", "is_a",
        )
        assert result.exit_code == 2


    @pytest.mark.parametrize("reasoner", ["owlrl", "structural"])
    def test_defined_classes(self, write_csv, defined_ttl, reasoner) -> None:
        csv_path = write_csv(
            [["id", "is_a"], ["Puppy", "Dog"], ["Puppy", "Animal"], ["Dog", "owl:Thing"]]
        )

        result = invoke(
            "-c", str(csv_path), "-w", str(defined_ttl), "-l", "id", "-a", "is_a",
            "--reasoner", reasoner,
        )

        assert result.exit_code == 0
        assert "The input was valid!" in result.output

    def test_reasoner_from_settings(self, write_csv, defined_ttl, monkeypatch) -> None:
        monkeypatch.setattr(settings, "reasoner", "structural")
        csv_path = write_csv([["id", "is_a"], ["Puppy", "Animal"]])

        result = invoke("-c", str(csv_path), "-w", str(defined_ttl), "-l", "id", "-a", "is_a")

        assert result.exit_code == 0
        assert "The input was valid!" in result.output

    def test_unsupported_reasoner(self, animals_csv, zoo_ttl) -> None:
        result = invoke(
            "-c", str(animals_csv), "-w", str(zoo_ttl), "-l", "id", "-a", "is_a", "-r", "elk",
        )
        assert result.exit_code == 2
        assert "Unsupported reasoner" in result.output

    def test_oracle_failure_is_fatal(self, animals_csv, zoo_ttl, tmp_path) -> None:
        out = tmp_path / "report.txt"

        with patch("owlrl.DeductiveClosure", side_effect=RuntimeError("rule engine down")):
            result = invoke(
                "-c", str(animals_csv), "-w", str(zoo_ttl), "-l", "id", "-a", "is_a",
                "-o", str(out),
            )

        assert result.exit_code == 1
        assert not out.exists()
        assert "OracleFailure" in result.output

class TestRootCommand:
    """Test the root CLI application."""

    def test_no_args_shows_help(self) -> None:
        result = runner.invoke(app, [])
        assert "validate" in result.output

    def test_help(self) -> None:
        result = runner.invoke(app, ["validate", "--help"])
        assert result.exit_code == 0
        assert "--ancestor" in result.output
