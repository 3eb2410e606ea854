from __future__ import annotations

from typer.testing import CliRunner

from amdstats.cli import app

runner = CliRunner()


def test_run_builds_report(data_dir, tmp_path):
    output_dir = tmp_path / "out"

    result = runner.invoke(app, ["run", "--data-dir", str(data_dir), "--output-dir", str(output_dir)])

    assert result.exit_code == 0, result.output
    assert "7 samples from 4 publications in 4 countries" in result.output
    assert (output_dir / "report.md").exists()
    assert (output_dir / "figures" / "publication_timeline.png").exists()


def test_run_reports_missing_data(tmp_path):
    result = runner.invoke(app, ["run", "--data-dir", str(tmp_path / "nowhere"), "--output-dir", str(tmp_path)])
    assert result.exit_code == 1


def test_summary_prints_headline_numbers(data_dir):
    result = runner.invoke(app, ["summary", "--data-dir", str(data_dir)])

    assert result.exit_code == 0, result.output
    assert "Total samples: 7" in result.output
    assert "Countries: 4" in result.output


def test_run_rejects_non_positive_max_age(data_dir, tmp_path):
    output_dir = tmp_path / "out"

    result = runner.invoke(
        app, ["run", "--data-dir", str(data_dir), "--output-dir", str(output_dir), "--max-age", "0"]
    )

    assert result.exit_code != 0
    assert not output_dir.exists()


def test_run_applies_max_age(data_dir, tmp_path):
    output_dir = tmp_path / "out"

    result = runner.invoke(
        app, ["run", "--data-dir", str(data_dir), "--output-dir", str(output_dir), "--max-age", "2000"]
    )

    assert result.exit_code == 0, result.output
    ages = (output_dir / "tables" / "sample_ages.tsv").read_text().splitlines()
    assert len(ages) == 1 + 3
