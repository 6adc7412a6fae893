"""Tests for the Dataset chain and @evaluate_datasets."""

import pandas as pd
import pytest

from flowmat.bench.dataset import (
    Dataset,
    GeneratedDataset,
    evaluate_datasets,
)
from flowmat.matrix.build import prepare_flows
from flowmat.selection.first import first_flows
from flowmat.statistics.connectivity import matrix_stats


class TestDatasetDefinition:
    """Dataset objects can describe themselves."""

    def test_base_dataset_define(self):
        ds = Dataset(name="test", kind="records", description="a test")
        defn = ds.define()
        assert defn["name"] == "test"
        assert defn["kind"] == "records"
        assert defn["class"] == "Dataset"

    def test_default_kind(self):
        assert Dataset(name="d").kind == "table"

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown dataset kind"):
            Dataset(name="x", kind="parquet")

    def test_generated_dataset_define(self, flow_records):
        records = Dataset(name="records", kind="records").with_data(flow_records)
        ds = GeneratedDataset(name="matrix", inputs=[records],
                              computation=prepare_flows, params={"fij": "fij"})
        defn = ds.define()
        assert defn["computation"] == "flowmat.matrix.build.prepare_flows"
        assert defn["inputs"][0]["name"] == "records"
        assert defn["kind"] == "matrix"


class TestDatasetValue:
    def test_value_without_data_raises(self):
        with pytest.raises(RuntimeError, match="no data"):
            Dataset(name="empty", kind="records").value

    def test_with_data_chains(self, flow_records):
        ds = Dataset(name="flows", kind="records")
        assert ds.with_data(flow_records) is ds
        assert ds.value is flow_records


class TestGeneratedDataset:
    def test_pipeline(self, flow_records):
        records = Dataset(name="flows", kind="records").with_data(flow_records)
        matrix = GeneratedDataset(name="matrix", inputs=[records],
                                  computation=prepare_flows)
        mask = GeneratedDataset(name="major", kind="mask", inputs=[matrix],
                                computation=first_flows, params={"k": 1})
        assert mask.value.values.sum() == 3
        assert matrix.value.loc["A", "B"] == 5

    def test_derive(self, flow_records):
        records = Dataset(name="flows", kind="records").with_data(flow_records)
        matrix = records.derive("matrix", prepare_flows)
        mask = matrix.derive("major", first_flows, kind="mask", k=1)
        assert mask.kind == "mask"
        assert mask.inputs == [matrix]
        assert mask.define()["params"] == {"k": "1"}
        assert mask.value.loc["A", "B"] == 1

    def test_computed_once(self, flow_records):
        calls = []

        def build(records):
            calls.append(1)
            return prepare_flows(records)

        records = Dataset(name="flows", kind="records").with_data(flow_records)
        matrix = records.derive("matrix", build)
        assert matrix.value is matrix.value
        assert len(calls) == 1

    def test_no_computation(self):
        with pytest.raises(ValueError, match="No computation"):
            GeneratedDataset(name="g").value


class TestEvaluateDatasets:
    def test_unwraps_datasets(self):
        @evaluate_datasets
        def total(frame, column="fij"):
            return frame[column].sum()

        ds = Dataset(name="d").with_data(pd.DataFrame({"fij": [1, 2]}))
        assert total(ds) == 3
        assert total(frame=ds) == 3

    def test_analysis_functions_accept_datasets(self, flow_matrix):
        ds = Dataset(name="m", kind="matrix").with_data(flow_matrix)
        assert matrix_stats(ds).n_links == 4

    def test_passes_other_values_through(self):
        @evaluate_datasets
        def identity(x):
            return x

        series = pd.Series([1, 2], name="value")
        assert identity(series) is series

    def test_keeps_metadata(self):
        assert prepare_flows.__name__ == "prepare_flows"
        assert "long-format" in prepare_flows.__doc__
