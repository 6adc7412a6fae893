"""Compare two flow matrices, typically a matrix and a filtered copy."""

import numpy as np
import pandas as pd

from flowmat.bench.dataset import evaluate_datasets
from flowmat.matrix.build import InputShapeError, check_square
from flowmat.statistics.connectivity import matrix_stats
from flowmat.utils import get_logger

LOG = get_logger("statistics.compare")

INDICATORS = ["nblinks", "sumflows", "connectcompx",
              "min", "Q1", "median", "Q3", "max", "mean", "sd"]

# only these rows get absolute and relative differences
DIFF_INDICATORS = ["nblinks", "sumflows"]


def _indicators(stats):
    return [stats.n_links, stats.sum_flows, stats.n_components_linked,
            stats.min, stats.q1, stats.median, stats.q3,
            stats.max, stats.mean, stats.sd]


def _relative_difference(reference, other):
    """|reference - other| as a percentage of reference."""
    diff = abs(reference - other)
    if reference == 0:
        return 0.0 if diff == 0 else np.inf
    return diff / reference * 100


@evaluate_datasets
def compare_matrices(mat1, mat2, digits=None, verbose=False):
    """Compare the statistics of two matrices over the same units.

    Parameters
    ----------
    mat1 : pd.DataFrame
        Reference matrix.
    mat2 : pd.DataFrame
        Matrix to compare, same units in the same order.
    digits : int, optional
        Round the table to this many decimals.
    verbose : bool
        If True, log the table.

    Returns
    -------
    pd.DataFrame
        Indexed by indicator (nblinks, sumflows, connectcompx, min, Q1,
        median, Q3, max, mean, sd), columns mat1, mat2, absdiff and
        reldiff (percent of mat1). The differences are only filled for
        nblinks and sumflows; elsewhere they are NaN.
    """
    check_square(mat1, "mat1")
    check_square(mat2, "mat2")
    if mat1.shape != mat2.shape:
        raise InputShapeError(
            f"Cannot compare a {mat1.shape} matrix with a {mat2.shape} matrix")
    if not (mat1.index.equals(mat2.index) and mat1.columns.equals(mat2.columns)):
        raise InputShapeError("Matrices are not indexed by the same ordered units")

    table = pd.DataFrame({
        "mat1": _indicators(matrix_stats(mat1)),
        "mat2": _indicators(matrix_stats(mat2)),
    }, index=INDICATORS, dtype=float)

    table["absdiff"] = np.nan
    table["reldiff"] = np.nan
    for row in DIFF_INDICATORS:
        reference, other = table.loc[row, "mat1"], table.loc[row, "mat2"]
        table.loc[row, "absdiff"] = abs(reference - other)
        table.loc[row, "reldiff"] = _relative_difference(reference, other)

    if digits is not None:
        table = table.round(digits)
    if verbose:
        LOG.info("Matrix comparison\n%s", table.to_string())
    return table
