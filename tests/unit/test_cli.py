"""Unit tests for the command line interface"""

import json

import pytest
from click.testing import CliRunner

from robust_outliers.cli.main import cli, _parse_values


@pytest.fixture
def runner():
    return CliRunner()


class TestParseValues:
    """Test --values parsing"""

    def test_numbers_and_missing(self):
        assert _parse_values("1, 2.5,NA,,nan") == [1.0, 2.5, None, None, None]

    def test_text_kept(self):
        assert _parse_values("1,abc") == [1.0, 'abc']


class TestDetectCommand:
    """Test the detect command"""

    def test_values_with_skipna(self, runner):
        result = runner.invoke(cli, ['detect', '--values', '1,2,3,NA,100', '--skipna'])

        assert result.exit_code == 0, result.output
        assert "Outliers: 1" in result.output
        assert "[4] 100" in result.output

    def test_missing_propagates_by_default(self, runner):
        result = runner.invoke(cli, ['detect', '--values', '1,2,3,NA,100'])

        assert result.exit_code == 0, result.output
        assert "Outliers: 0" in result.output

    def test_input_file(self, runner, sample_csv):
        result = runner.invoke(cli, ['detect', '-i', str(sample_csv), '--criterion', '3'])

        assert result.exit_code == 0, result.output
        assert "Outliers: 4" in result.output
        assert "[98] 610" in result.output

    def test_json_output_file(self, runner, sample_csv, tmp_path):
        out = tmp_path / "result.json"
        result = runner.invoke(cli, [
            'detect', '-i', str(sample_csv), '-f', 'json', '-o', str(out)
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data['indices'] == [98, 99]
        assert data['values'] == [610.0, 631.0]
        assert data['center'] == 25.0
        assert data['warnings'] == []

    def test_multi_criterion_warns(self, runner, sample_csv):
        result = runner.invoke(cli, [
            'detect', '-i', str(sample_csv), '--criterion', '4', '--criterion', '2'
        ])

        assert result.exit_code == 0, result.output
        assert "Warning: length(crit) > 1, only the first element was used" in result.output
        assert "Outliers: 2" in result.output

    def test_negative_criterion_warns(self, runner, sample_csv):
        result = runner.invoke(cli, ['detect', '-i', str(sample_csv), '--criterion=-3'])

        assert result.exit_code == 0, result.output
        assert "Warning: crit < 0, abs(crit) used instead" in result.output
        assert "Outliers: 4" in result.output

    def test_non_numeric_values(self, runner):
        result = runner.invoke(cli, ['detect', '--values', 'a,b,c'])

        assert result.exit_code == 1
        assert "x must be numeric" in result.output

    def test_all_missing_values(self, runner):
        result = runner.invoke(cli, ['detect', '--values', 'NA,NA'])

        assert result.exit_code == 1
        assert "x values are all NA" in result.output

    def test_unknown_column(self, runner, sample_csv):
        result = runner.invoke(cli, ['detect', '-i', str(sample_csv), '--column', 'price'])

        assert result.exit_code == 1
        assert "Column 'price' not found" in result.output

    def test_requires_one_input(self, runner, sample_csv):
        neither = runner.invoke(cli, ['detect'])
        both = runner.invoke(cli, ['detect', '-i', str(sample_csv), '--values', '1,2'])

        assert neither.exit_code == 2
        assert both.exit_code == 2

    def test_config_sets_defaults(self, runner, sample_csv, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("detection:\n  criterion: 3\n")

        result = runner.invoke(cli, ['--config', str(config), 'detect', '-i', str(sample_csv)])

        assert result.exit_code == 0, result.output
        assert "Criterion: 3" in result.output
        assert "Outliers: 4" in result.output

    def test_json_output_is_strict_with_infinite_values(self, runner, tmp_path):
        out = tmp_path / "inf.json"
        result = runner.invoke(cli, [
            'detect', '--values', '1,2,3,2,inf', '-f', 'json', '-o', str(out)
        ])

        assert result.exit_code == 0, result.output

        def reject(token):
            raise ValueError(token)

        data = json.loads(out.read_text(), parse_constant=reject)
        assert data['indices'] == [4]
        assert data['values'] == [None]

    def test_unknown_log_level(self, runner, sample_csv, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("logging:\n  level: VERBOSE\n")

        result = runner.invoke(cli, ['--config', str(config), 'detect', '-i', str(sample_csv)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_empty_config_section(self, runner, sample_csv, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("detection:\n")

        result = runner.invoke(cli, ['--config', str(config), 'detect', '-i', str(sample_csv)])

        assert result.exit_code == 1
        assert "section 'detection' must be a mapping" in result.output


class TestOtherCommands:
    """Test sensitivity and generate commands"""

    def test_sensitivity(self, runner, sample_csv):
        result = runner.invoke(cli, ['sensitivity', '-i', str(sample_csv), '--criteria', '3,4'])

        assert result.exit_code == 0, result.output
        assert "CRITERION SENSITIVITY REPORT" in result.output
        assert "Criteria tested: 2" in result.output

    def test_sensitivity_bad_criteria(self, runner, sample_csv):
        result = runner.invoke(cli, ['sensitivity', '-i', str(sample_csv), '--criteria', '3,x'])
        assert result.exit_code == 2

    def test_generate(self, runner, tmp_path):
        out = tmp_path / "generated.csv"
        result = runner.invoke(cli, ['generate', '-o', str(out), '--seed', '1'])

        assert result.exit_code == 0, result.output
        assert "Wrote 100 observations" in result.output
        assert out.exists()
