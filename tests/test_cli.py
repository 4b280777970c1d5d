"""Command-line interface."""
import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner
from loguru import logger

from rebar_design.cli import main

CONFIG_DIR = Path(__file__).parent.parent / "config"


@pytest.fixture
def runner():
    yield CliRunner()
    # ``run`` installs a stderr sink bound to the runner's stream
    logger.remove()
    logger.disable("rebar_design")


@pytest.fixture
def quick_slab(tmp_path):
    """Sample slab with a small optimizer budget."""
    data = yaml.safe_load((CONFIG_DIR / "sample_slab.yaml").read_text(encoding="utf-8"))
    data["optimizer"] = {"population_size": 16, "generations": 8}
    path = tmp_path / "slab.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


class TestTemplate:
    def test_prints_template(self, runner):
        result = runner.invoke(main, ["template", "beam"])
        assert result.exit_code == 0
        assert yaml.safe_load(result.output)["element"] == "beam"

    def test_rejects_unknown_element(self, runner):
        result = runner.invoke(main, ["template", "footing"])
        assert result.exit_code != 0


class TestValidate:
    def test_valid_file(self, runner):
        result = runner.invoke(main, ["validate", str(CONFIG_DIR / "sample_column.yaml")])
        assert result.exit_code == 0
        assert "Input file is valid (column)." in result.output

    def test_invalid_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("element: slab\ninput:\n  length: -1\n", encoding="utf-8")
        result = runner.invoke(main, ["validate", str(path)])
        assert result.exit_code == 1
        assert "input.length" in result.output


class TestRun:
    def test_slab_text_report(self, runner):
        result = runner.invoke(main, ["run", str(CONFIG_DIR / "sample_slab.yaml")])
        assert result.exit_code == 0, result.output
        assert "Two-way slab" in result.output
        assert "Main: 10φ @ 210 c/c (20 bars)" in result.output
        assert "Bar bending schedule:" in result.output
        assert "Opening O1" in result.output

    def test_log_file_receives_debug_records(self, runner, tmp_path):
        log_path = tmp_path / "design.log"
        result = runner.invoke(
            main, ["run", str(CONFIG_DIR / "sample_slab.yaml"), "--log-file", str(log_path)]
        )
        assert result.exit_code == 0, result.output
        logger.remove()
        assert "analysed" in log_path.read_text(encoding="utf-8")

    def test_slab_json(self, runner):
        result = runner.invoke(main, ["run", str(CONFIG_DIR / "sample_slab.yaml"), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["element"] == "slab"
        assert data["is_valid"] is True
        assert data["design"]["main_bar_count"] == 20
        assert [e["mark"] for e in data["schedule"]] == ["M1", "D1"]
        assert data["openings"][0]["trimmer_bar_diameter"] == 16

    def test_slab_optimize_and_alternatives(self, runner, quick_slab):
        result = runner.invoke(
            main, ["run", quick_slab, "--optimize", "--alternatives", "--seed", "3", "--json"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["optimization"]["generations_run"] == 8
        assert len(data["alternatives"]) == 3

    def test_beam(self, runner):
        result = runner.invoke(main, ["run", str(CONFIG_DIR / "sample_beam.yaml")])
        assert result.exit_code == 0, result.output
        assert "Beam design:" in result.output
        assert "Stirrups" in result.output

    def test_column_json(self, runner):
        result = runner.invoke(main, ["run", str(CONFIG_DIR / "sample_column.yaml"), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["design"]["longitudinal_bar_count"] == 8

    def test_shape(self, runner):
        result = runner.invoke(main, ["run", str(CONFIG_DIR / "sample_shape.yaml")])
        assert result.exit_code == 0, result.output
        assert "Shape: l_shape (moderate)" in result.output
        assert "Opening O2: 6-20φ trimmers" in result.output

    def test_optimize_rejected_for_beam(self, runner):
        result = runner.invoke(main, ["run", str(CONFIG_DIR / "sample_beam.yaml"), "--optimize"])
        assert result.exit_code == 1
        assert "slab designs only" in result.output
