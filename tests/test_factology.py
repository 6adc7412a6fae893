"""Tests for the Factology system."""

import pandas as pd
import pytest

from flowmat.factology.fact import Fact, fact, topological, distributional
from flowmat.factology.factology import Factology, MatrixFacts
from flowmat.matrix.build import InputShapeError


class TestFact:
    def test_fact_creation(self):
        f = Fact("n", "Count", "How many", "links", 42)
        assert f.value == 42
        assert f.unit == "links"

    def test_fact_str(self):
        f = Fact("n", "Count", "How many", "links", 42)
        assert str(f) == "Count: 42 links"

    def test_fact_str_without_unit(self):
        assert str(Fact("d", "Density", "", None, 0.5)) == "Density: 0.5"

    def test_fact_to_dict(self):
        d = Fact("n", "Count", "How many", "links", 42).to_dict()
        assert d["label"] == "n"
        assert d["value"] == 42


class TestFactDecorator:
    def test_fact_wraps_return_value(self):
        class MyFacts:
            @fact("Test", "units")
            def measure(self):
                """A test measurement."""
                return 99

        result = MyFacts().measure()
        assert isinstance(result, Fact)
        assert result.label == "measure"
        assert result.description == "A test measurement."
        assert result.value == 99

    def test_categories_are_cached(self):
        calls = []

        class MyFacts(Factology):
            @topological
            @fact("Calls", None)
            def calls(self):
                calls.append(1)
                return len(calls)

        facts = MyFacts(subject=None)
        assert facts.calls().value == 1
        assert facts.calls().value == 1
        assert len(calls) == 1
        assert len(facts.facts_of("topological")) == 1
        assert facts.facts_of("distributional") == []


class TestMatrixFacts:
    def test_collects_all_facts(self, flow_matrix):
        facts = MatrixFacts(flow_matrix).collect()
        assert len(facts) == len(MatrixFacts.fact_methods()) == 10
        assert all(isinstance(f, Fact) for f in facts)

    def test_values(self, flow_matrix):
        facts = MatrixFacts(flow_matrix)
        assert facts.unit_count().value == 3
        assert facts.link_count().value == 4
        assert facts.component_count().value == 1
        assert facts.largest_component().value == 3
        assert facts.total_flow().value == 11
        assert facts.largest_flow().value == 5

    def test_categories(self, flow_matrix):
        facts = MatrixFacts(flow_matrix)
        facts.collect()
        assert len(facts.facts_of("topological")) == 6
        assert len(facts.facts_of("distributional")) == 4

    def test_to_dataframe(self, flow_matrix):
        df = MatrixFacts(flow_matrix, target="commuters").to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert {"label", "name", "description", "unit", "value"} <= set(df.columns)
        assert df.set_index("label").loc["link_count", "value"] == 4

    def test_rejects_non_square(self, flow_matrix):
        with pytest.raises(InputShapeError):
            MatrixFacts(flow_matrix.iloc[:1])


class TestCollectModes:
    class Broken(MatrixFacts):
        @distributional
        @fact("Broken", None)
        def broken(self):
            """Always fails."""
            raise RuntimeError("no such measurement")

    def test_prod_raises(self, flow_matrix):
        with pytest.raises(RuntimeError):
            self.Broken(flow_matrix).collect(mode="prod")

    def test_dev_skips(self, flow_matrix):
        facts = self.Broken(flow_matrix).collect(mode="dev")
        assert len(facts) == 10
