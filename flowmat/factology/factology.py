"""Factology: factsheets of flow matrices.

A Factology collects the Facts its subclass defines. MatrixFacts is the
factsheet of one flow matrix, built on matrix_stats.
"""

from abc import ABC

import pandas as pd

from flowmat.factology.fact import fact, topological, distributional
from flowmat.matrix.build import check_square
from flowmat.statistics.connectivity import matrix_stats
from flowmat.utils import get_logger

LOG = get_logger("factology")


class Factology(ABC):
    """Abstract base: a collection of Facts about a subject.

    Subclasses define measurement methods decorated with @fact, and
    optionally @topological or @distributional. The .collect() method
    gathers all defined facts.
    """

    def __init__(self, subject, target=None):
        """
        Parameters
        ----------
        subject : any
            What the facts are about.
        target : str, optional
            Name of the subject, for reports.
        """
        self.subject = subject
        self.target = target
        self._facts_by_category = {}

    @classmethod
    def fact_methods(cls):
        """List all methods decorated with @fact."""
        return [name for name in dir(cls)
                if hasattr(getattr(cls, name, None), '__defines_a_fact__')]

    def facts_of(self, category):
        """Facts already computed in a category ("topological", ...)."""
        return list(self._facts_by_category.get(category, []))

    def collect(self, mode="prod"):
        """Collect all defined facts.

        Parameters
        ----------
        mode : str
            "prod" raises on errors; "dev" tolerates and logs them.

        Returns
        -------
        list of Fact
        """
        results = []
        for method_name in self.fact_methods():
            try:
                results.append(getattr(self, method_name)())
            except Exception as e:
                if mode == "prod":
                    raise
                LOG.warning("Skipping fact '%s': %s", method_name, e)
        return results

    def collect_dicts(self, mode="prod"):
        """Collect facts as a list of dicts (for JSON/DataFrame export)."""
        return [f.to_dict() for f in self.collect(mode=mode)]

    def to_dataframe(self, mode="prod"):
        """Collect facts into a DataFrame."""
        return pd.DataFrame(self.collect_dicts(mode=mode))


class MatrixFacts(Factology):
    """Factsheet of a flow matrix."""

    def __init__(self, matrix, target=None):
        check_square(matrix)
        super().__init__(matrix, target=target)

    @property
    def matrix(self):
        return self.subject

    @property
    def stats(self):
        try:
            return self._stats
        except AttributeError:
            self._stats = matrix_stats(self.matrix)
            return self._stats

    @topological
    @fact("Number of units", "units")
    def unit_count(self):
        """Number of spatial units (matrix rows)."""
        return self.stats.dim[0]

    @topological
    @fact("Number of links", "links")
    def link_count(self):
        """Number of positive cells."""
        return self.stats.n_links

    @topological
    @fact("Density", None)
    def density(self):
        """Share of cells holding a flow."""
        return self.stats.density

    @topological
    @fact("Weak components", "components")
    def component_count(self):
        """Weakly connected components, isolated units included."""
        return self.stats.n_components

    @topological
    @fact("Linked weak components", "components")
    def linked_component_count(self):
        """Weakly connected components of more than one unit."""
        return self.stats.n_components_linked

    @topological
    @fact("Largest component", "units")
    def largest_component(self):
        """Number of units in the largest weak component."""
        sizes = self.stats.components["sizecomp"]
        return int(sizes.max()) if len(sizes) else 0

    @distributional
    @fact("Total flow", None)
    def total_flow(self):
        """Sum of the positive flows."""
        return self.stats.sum_flows

    @distributional
    @fact("Median flow", None)
    def median_flow(self):
        """Median of the positive flows."""
        return self.stats.median

    @distributional
    @fact("Mean flow", None)
    def mean_flow(self):
        """Mean of the positive flows."""
        return self.stats.mean

    @distributional
    @fact("Largest flow", None)
    def largest_flow(self):
        """Largest single flow."""
        return self.stats.max
