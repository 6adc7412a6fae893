"""Dominant flows and the roles of units in a dominance hierarchy.

Following Nystuen and Dacey's nodal region analysis, a flow from i to j is
dominant when the destination j "weighs" more than the origin i by more
than a given ratio. Weights are typically the units' total inflows or
their populations. Keeping, for each origin, its largest flow (first_flows
with nfirst, k=1) and then only the dominant ones yields a forest of
dominance trees, whose units are dominant, intermediary or dominated.
"""

import numpy as np
import pandas as pd

from flowmat.bench.dataset import evaluate_datasets
from flowmat.matrix.build import InputShapeError, check_square
from flowmat.utils import get_logger

LOG = get_logger("selection.dominance")

ROLES = ("dominant", "intermediary", "dominated")


def _align_weights(weights, ids, name):
    """Weights as a float array in the order of ids.

    A Series or a mapping is aligned on ids by label; any other array-like
    is taken to be in matrix order already.
    """
    if isinstance(weights, dict):
        weights = pd.Series(weights)
    if isinstance(weights, pd.Series):
        weights = weights.copy()
        weights.index = weights.index.astype(str)
        if not weights.index.is_unique:
            raise InputShapeError(f"{name} has duplicate unit ids")
        missing = [u for u in ids if u not in weights.index]
        if missing:
            raise InputShapeError(f"{name} has no weight for unit(s) {missing[:5]}")
        aligned = weights.reindex(list(ids)).values.astype(float)
    else:
        aligned = np.asarray(weights, dtype=float)
        if aligned.shape != (len(ids),):
            raise InputShapeError(
                f"{name} has shape {aligned.shape}, expected ({len(ids)},)")
    if np.isnan(aligned).any():
        raise InputShapeError(f"{name} holds missing weights")
    return aligned


@evaluate_datasets
def dom_flows(mat, wi, wj, k):
    """Select the dominant flows of a matrix.

    A flow from i to j is kept when wj[j] / wi[i] > k. Origins with a null
    weight never send dominant flows, and cells without flow are never
    selected.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix, usually already filtered by first_flows.
    wi : pd.Series, dict or array-like
        Weight of each unit as an origin.
    wj : pd.Series, dict or array-like
        Weight of each unit as a destination.
    k : float
        Ratio threshold.

    Returns
    -------
    pd.DataFrame
        Mask of 0/1, same index and columns as mat.
    """
    check_square(mat)
    w_origin = _align_weights(wi, [str(u) for u in mat.index], "wi")
    w_destination = _align_weights(wj, [str(u) for u in mat.columns], "wj")

    has_weight = w_origin > 0
    # null origin weights are masked below, the 1.0 only keeps the division finite
    denominator = np.where(has_weight, w_origin, 1.0)
    ratio = w_destination[np.newaxis, :] / denominator[:, np.newaxis]
    selected = has_weight[:, np.newaxis] & (ratio > k) & (mat.values > 0)

    mask = pd.DataFrame(selected.astype(int), index=mat.index, columns=mat.columns)
    LOG.info("Dominant flows (ratio > %s): %d of %d flows",
             k, int(selected.sum()), int((mat.values > 0).sum()))
    return mask


@evaluate_datasets
def node_roles(mat):
    """Classify units by their position in a flow graph.

    A unit receiving flows and sending none is dominant, one receiving and
    sending is intermediary, one only sending is dominated. Units with
    neither are left out.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix, typically mask * matrix after dom_flows.

    Returns
    -------
    pd.DataFrame
        Indexed by unit id: indegree, outdegree, sum_in (total received
        flow, used to size the units on a map) and role.
    """
    check_square(mat)
    links = mat.values > 0
    roles = pd.DataFrame({
        "indegree": links.sum(axis=0),
        "outdegree": links.sum(axis=1),
        "sum_in": mat.values.sum(axis=0),
    }, index=mat.index)

    roles = roles[(roles["indegree"] > 0) | (roles["outdegree"] > 0)].copy()
    roles["role"] = np.select(
        [(roles["indegree"] > 0) & (roles["outdegree"] == 0),
         (roles["indegree"] > 0) & (roles["outdegree"] > 0)],
        ["dominant", "intermediary"],
        default="dominated",
    )
    LOG.info("Node roles: %s", dict(roles["role"].value_counts()))
    return roles
