"""Integration tests: generate, load, detect and export"""

import json
import warnings

import pytest
import numpy as np
import pandas as pd
from click.testing import CliRunner

from robust_outliers import detect, RobustOutlierDetector, CriterionWarning
from robust_outliers.cli.main import cli
from robust_outliers.data import SampleLoader, SyntheticDataGenerator
from robust_outliers.outliers import SensitivityAnalyzer


class TestEndToEnd:
    """Full workflow from synthetic data to exported outliers"""

    def test_generate_load_detect(self, tmp_path):
        generator = SyntheticDataGenerator(seed=123)
        generator.generate_dataframe().to_csv(tmp_path / "sample.csv", index=False)

        loader = SampleLoader(tmp_path)
        sample = loader.load_sample("sample.csv")

        result = RobustOutlierDetector(criterion=4).detect(sample)
        assert {98, 99} <= set(result.indices.tolist())

        path = loader.save_result(result, "outliers.json")
        exported = pd.read_json(path, orient='records')
        assert exported['index'].tolist() == result.indices.tolist()

    def test_criterion_sweep_on_missing_data(self):
        generator = SyntheticDataGenerator(seed=5)
        sample = generator.inject_missing(generator.generate_contaminated_sample(), 0.05)

        sweep = SensitivityAnalyzer(skipna=True, parallel=True).analyze(sample)

        assert sweep.is_monotone
        counts = sweep.summary['n_outliers'].tolist()
        assert counts == sorted(counts, reverse=True)
        for result in sweep.results.values():
            assert not np.isnan(result.values).any()

    def test_warnings_can_be_escalated(self, constructed_sample):
        with warnings.catch_warnings():
            warnings.simplefilter("error", CriterionWarning)
            with pytest.raises(CriterionWarning):
                detect(constructed_sample, criterion=-4)

    def test_cli_generate_then_detect(self, tmp_path):
        runner = CliRunner()
        out = tmp_path / "generated.csv"

        generated = runner.invoke(cli, ['generate', '-o', str(out), '--seed', '3'])
        assert generated.exit_code == 0, generated.output

        detected = runner.invoke(cli, ['detect', '-i', str(out), '-f', 'json', '-o', str(tmp_path / 'r.json')])
        assert detected.exit_code == 0, detected.output

        data = json.loads((tmp_path / "r.json").read_text())
        assert {98, 99} <= set(data['indices'])
