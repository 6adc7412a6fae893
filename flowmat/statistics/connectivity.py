"""Descriptive statistics of a flow matrix.

The matrix is read as a directed weighted graph: one node per unit, one
edge per positive cell. matrix_stats reports its size, its density, its
weakly connected components, the degrees of its nodes and the distribution
of its flows. rank_size and lorenz_curve return the series behind the
usual diagnostic plots, for a plotting layer to draw.
"""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
import pandas as pd
from scipy import sparse
from scipy.sparse import csgraph

from flowmat.bench.dataset import evaluate_datasets
from flowmat.matrix.build import check_square
from flowmat.utils import get_logger

LOG = get_logger("statistics.connectivity")


@dataclass
class MatrixStats:
    """Statistics of one flow matrix.

    Attributes
    ----------
    dim : tuple of int
        Matrix dimensions.
    n_cells : int
        Number of cells.
    n_links : int
        Number of positive cells.
    density : float
        n_links / n_cells.
    n_components : int
        Weakly connected components, isolated units included.
    n_components_linked : int
        Weakly connected components of more than one unit.
    components : pd.DataFrame
        One row per component: idcomp, sizecomp (units), wcomp (summed
        weighted degree of its units).
    membership : pd.DataFrame
        One row per unit: id, idcomp.
    degrees : pd.DataFrame
        Indexed by unit id: degree (outgoing links) and wdegree (outgoing
        flows).
    sum_flows, min, q1, median, q3, max, mean, sd : float
        Distribution of the positive flows. All 0.0 when there is none.
    """
    dim: Tuple[int, int]
    n_cells: int
    n_links: int
    density: float
    n_components: int
    n_components_linked: int
    components: pd.DataFrame = field(repr=False)
    membership: pd.DataFrame = field(repr=False)
    degrees: pd.DataFrame = field(repr=False)
    sum_flows: float = 0.0
    min: float = 0.0
    q1: float = 0.0
    median: float = 0.0
    q3: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    sd: float = 0.0

    def summary(self):
        """Scalar indicators as a Series."""
        return pd.Series({
            "n_units": self.dim[0],
            "n_links": self.n_links,
            "density": self.density,
            "n_components": self.n_components,
            "n_components_linked": self.n_components_linked,
            "sum_flows": self.sum_flows,
            "min": self.min,
            "Q1": self.q1,
            "median": self.median,
            "Q3": self.q3,
            "max": self.max,
            "mean": self.mean,
            "sd": self.sd,
        })

    def report(self, log=LOG):
        log.info("matrix dimension: %d X %d\n"
                 "nb. links: %d\n"
                 "density: %.4f\n"
                 "nb. of components (weak): %d\n"
                 "nb. of components (weak, size > 1): %d\n"
                 "sum of flows: %s\n"
                 "min: %s  Q1: %s  median: %s  Q3: %s  max: %s\n"
                 "mean: %s  sd: %s",
                 self.dim[0], self.dim[1], self.n_links, self.density,
                 self.n_components, self.n_components_linked, self.sum_flows,
                 self.min, self.q1, self.median, self.q3, self.max,
                 self.mean, self.sd)


def weak_components(mat):
    """Weakly connected components of the graph of positive flows.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix.

    Returns
    -------
    (int, np.ndarray)
        Number of components, and the component label of each unit in
        matrix order. Labels start at 0 and follow the order in which
        units first appear.
    """
    values = mat.values
    if values.shape[0] == 0:
        return 0, np.array([], dtype=int)
    graph = sparse.csr_matrix(np.where(values > 0, values, 0))
    return csgraph.connected_components(graph, directed=True, connection="weak")


def _flow_distribution(values):
    """Sum and summary of the positive flows, 0.0 where undefined."""
    positive = np.sort(values[values > 0]).astype(float)
    if len(positive) == 0:
        return dict(sum_flows=0.0, min=0.0, q1=0.0, median=0.0, q3=0.0,
                    max=0.0, mean=0.0, sd=0.0)
    q1, median, q3 = np.percentile(positive, [25, 50, 75])
    return dict(
        sum_flows=float(positive.sum()),
        min=float(positive[0]),
        q1=float(q1),
        median=float(median),
        q3=float(q3),
        max=float(positive[-1]),
        mean=float(positive.mean()),
        sd=float(positive.std(ddof=1)) if len(positive) > 1 else 0.0,
    )


@evaluate_datasets
def matrix_stats(mat, verbose=False):
    """Describe a flow matrix as a graph and as a distribution of flows.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix.
    verbose : bool
        If True, log a report of the statistics.

    Returns
    -------
    MatrixStats
    """
    check_square(mat)
    values = mat.values
    links = values > 0
    n_cells = values.size
    n_links = int(links.sum())

    degrees = pd.DataFrame({
        "degree": links.sum(axis=1),
        "wdegree": values.sum(axis=1),
    }, index=mat.index)

    n_components, labels = weak_components(mat)
    sizes = np.bincount(labels, minlength=n_components)
    components = pd.DataFrame({
        "idcomp": np.arange(n_components),
        "sizecomp": sizes,
        "wcomp": np.bincount(labels, weights=degrees["wdegree"].values.astype(float),
                             minlength=n_components),
    })
    membership = pd.DataFrame({"id": mat.index, "idcomp": labels})

    stats = MatrixStats(
        dim=mat.shape,
        n_cells=n_cells,
        n_links=n_links,
        density=n_links / n_cells if n_cells else 0.0,
        n_components=int(n_components),
        n_components_linked=int((sizes > 1).sum()),
        components=components,
        membership=membership,
        degrees=degrees,
        **_flow_distribution(values),
    )
    if verbose:
        stats.report()
    return stats


@evaluate_datasets
def rank_size(mat, weighted=False):
    """Units ranked by outgoing degree, for a rank-size plot.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix.
    weighted : bool
        Rank by outgoing flow total instead of outgoing link count.

    Returns
    -------
    pd.DataFrame
        Indexed by unit id, units without outgoing flow left out:
        rank (1 for the largest) and size.
    """
    check_square(mat)
    if weighted:
        size = mat.sum(axis=1)
    else:
        size = (mat > 0).sum(axis=1)
    size = size[size > 0].sort_values(ascending=False, kind="stable")
    return pd.DataFrame({
        "rank": np.arange(1, len(size) + 1),
        "size": size.values,
    }, index=size.index)


@evaluate_datasets
def lorenz_curve(mat):
    """Concentration of the flows, for a Lorenz curve.

    Returns
    -------
    pd.DataFrame
        One row per positive flow, smallest first: fij, cum_links
        (percentage of links up to this one) and cum_flows (percentage of
        the total intensity they carry).
    """
    check_square(mat)
    positive = np.sort(mat.values[mat.values > 0]).astype(float)
    n = len(positive)
    if n == 0:
        return pd.DataFrame(columns=["fij", "cum_links", "cum_flows"])
    return pd.DataFrame({
        "fij": positive,
        "cum_links": np.arange(1, n + 1) / n * 100,
        "cum_flows": np.cumsum(positive) / positive.sum() * 100,
    })
