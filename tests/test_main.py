import json

import pytest
from typer.testing import CliRunner

from pedigree_layout.main import app

runner = CliRunner()

NUCLEAR_FAMILY = [
    {"name": "gf", "sex": "M", "top_level": True},
    {"name": "gm", "sex": "F", "top_level": True},
    {"name": "child", "sex": "F", "mother": "gm", "father": "gf"},
]


@pytest.fixture
def dataset_file(tmp_path):
    path = tmp_path / "family.json"
    path.write_text(json.dumps(NUCLEAR_FAMILY))
    return path


@pytest.fixture
def broken_dataset_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps([{"name": "child", "sex": "F", "mother": "nobody"}]))
    return path


def test_layout_prints_table(dataset_file):
    result = runner.invoke(app, ["layout", str(dataset_file)])
    assert result.exit_code == 0
    assert "Pedigree Layout" in result.output
    assert "child" in result.output


def test_layout_writes_json(dataset_file, tmp_path):
    out = tmp_path / "layout.json"
    result = runner.invoke(app, ["layout", str(dataset_file), "--out", str(out), "--pretty"])

    assert result.exit_code == 0
    data = json.loads(out.read_text())
    assert data["metadata"]["individual_count"] == 3
    assert {p["name"] for p in data["positions"]} == {"gf", "gm", "child"}


def test_layout_with_config(dataset_file, tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("width: 1000\n")
    out = tmp_path / "layout.json"

    result = runner.invoke(app, ["layout", str(dataset_file), "-c", str(config), "-o", str(out)])

    assert result.exit_code == 0
    assert json.loads(out.read_text())["metadata"]["width"] == 1000


def test_layout_reports_validation_errors(broken_dataset_file):
    result = runner.invoke(app, ["layout", str(broken_dataset_file)])
    assert result.exit_code == 1
    assert "Mother 'nobody' not found for 'child'" in result.output


def test_layout_reports_bad_config(dataset_file, tmp_path):
    config = tmp_path / "layout.yaml"
    config.write_text("colour: red\n")
    result = runner.invoke(app, ["layout", str(dataset_file), "-c", str(config)])
    assert result.exit_code == 1
    assert "Unknown layout options" in result.output


def test_validate_clean_dataset(dataset_file):
    result = runner.invoke(app, ["validate", str(dataset_file)])
    assert result.exit_code == 0
    assert "No validation issues found in 3 individuals" in result.output


def test_validate_lists_errors(broken_dataset_file):
    result = runner.invoke(app, ["validate", str(broken_dataset_file)])
    assert result.exit_code == 1
    assert "Found 1 validation errors:" in result.output
    assert "Mother 'nobody' not found for 'child'" in result.output


def test_export_dot(dataset_file, tmp_path):
    out = tmp_path / "pedigree.dot"
    result = runner.invoke(app, ["export", str(dataset_file), "--out", str(out)])
    assert result.exit_code == 0
    assert "digraph" in out.read_text()


def test_export_rejects_unknown_format(dataset_file, tmp_path):
    result = runner.invoke(app, ["export", str(dataset_file), "--out", str(tmp_path / "pedigree.txt")])
    assert result.exit_code == 1
    assert "Unsupported export format" in result.output
