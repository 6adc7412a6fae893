"""Major flows: row-wise and whole-matrix selection masks.

first_flows applies a selection strategy to each origin's outgoing flows
independently. first_flows_global pools every cell of the matrix. Both
return a mask of 0/1 with the shape of the matrix; multiplying the mask by
the matrix keeps the selected intensities.
"""

import numpy as np
import pandas as pd

from flowmat.bench.dataset import evaluate_datasets
from flowmat.matrix.build import check_square
from flowmat.selection.methods import (
    SelectionMethod,
    TiesMethod,
    as_method,
    as_ties_method,
    rank,
    selector,
)
from flowmat.utils import get_logger

LOG = get_logger("selection.first")


def _mask(mat, selected):
    """Wrap a boolean array as a 0/1 mask, forcing source zeros to 0."""
    selected = np.asarray(selected, dtype=bool) & (mat.values > 0)
    return pd.DataFrame(selected.astype(int), index=mat.index, columns=mat.columns)


def _report(mask, mat, label):
    n_selected = int(mask.values.sum())
    if n_selected == 0:
        LOG.warning("%s: no flow selected, returning an empty mask", label)
        return
    kept = float((mask.values * mat.values).sum())
    total = float(mat.values[mat.values > 0].sum())
    LOG.info("%s: %d of %d flows selected (%.1f%% of total intensity)",
             label, n_selected, int((mat.values > 0).sum()),
             100 * kept / total)


@evaluate_datasets
def first_flows(mat, method=SelectionMethod.NFIRST, k=1,
                ties_method=TiesMethod.FIRST, seed=None):
    """Select the major outgoing flows of each origin.

    Each row is handled on its own: there is no interaction between
    origins.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix, origins as rows.
    method : SelectionMethod or str
        "nfirst" keeps the k largest flows of each row, "xfirst" the flows
        greater than k, "xsumfirst" the largest flows until their sum
        reaches k.
    k : number
        Number of flows, or flow threshold, depending on method.
    ties_method : TiesMethod or str
        Order of equal flows for "nfirst": "first" or "random".
    seed : int, optional
        Seed for the "random" ties method.

    Returns
    -------
    pd.DataFrame
        Mask of 0/1, same index and columns as mat.
    """
    check_square(mat)
    method = as_method(method)
    ties_method = as_ties_method(ties_method)
    select = selector(method)
    random_state = np.random.RandomState(seed)

    values = mat.values
    selected = np.zeros(values.shape, dtype=bool)
    for row in range(values.shape[0]):
        selected[row] = select(values[row], k, ties_method, random_state)

    mask = _mask(mat, selected)
    _report(mask, mat, f"{method.value} (k={k}) per origin")
    return mask


@evaluate_datasets
def first_flows_global(mat, method=SelectionMethod.NFIRST, k=1,
                       ties_method=TiesMethod.FIRST, seed=None):
    """Select the major flows of the whole matrix.

    Every cell competes with every other. For "nfirst", cells are ranked
    over the full matrix and those ranked above n_cells - k are kept, so
    at most k flows survive. Cells are visited column by column, so among
    equal flows ranked in order of appearance the one in the rightmost
    column, then the lowest row, is kept first.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix.
    method : SelectionMethod or str
        "nfirst", "xfirst" or "xsumfirst" (see first_flows).
    k : number
        Number of flows, or flow threshold, depending on method.
    ties_method : TiesMethod or str
        Order of equal flows for "nfirst": "first" or "random".
    seed : int, optional
        Seed for the "random" ties method.

    Returns
    -------
    pd.DataFrame
        Mask of 0/1, same index and columns as mat.
    """
    check_square(mat)
    method = as_method(method)
    ties_method = as_ties_method(ties_method)
    random_state = np.random.RandomState(seed)

    # column-major order decides which of equal flows is kept
    flat = mat.values.ravel(order="F")
    if method is SelectionMethod.NFIRST:
        if k < 0:
            raise ValueError(f"nfirst needs a non-negative number of flows, got {k}")
        selected = rank(flat, ties_method, random_state) > flat.size - k
    else:
        selected = selector(method)(flat, k, ties_method, random_state)

    mask = _mask(mat, selected.reshape(mat.shape, order="F"))
    _report(mask, mat, f"{method.value} (k={k}) over the matrix")
    return mask
