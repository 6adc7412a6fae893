"""Selection strategies applied to a vector of flows.

Each strategy takes the flows of one pool (an origin's outgoing flows, or
the whole matrix flattened) and returns a boolean vector of the same
length telling which flows are kept. Only strictly positive flows can be
kept.

    nfirst     the k largest flows
    xfirst     the flows greater than k
    xsumfirst  the largest flows, until their sum reaches k
"""

from enum import Enum

import numpy as np
import pandas as pd


class SelectionMethod(Enum):
    """How flows are ranked and cut."""
    NFIRST = "nfirst"
    XFIRST = "xfirst"
    XSUMFIRST = "xsumfirst"


class TiesMethod(Enum):
    """How equal flows are ordered when ranking them.

    FIRST ranks equal flows in their order of appearance, as
    pandas.Series.rank(method="first") does: of two equal flows competing
    for the last place, the one appearing later ranks higher and is kept.
    RANDOM ranks them in a random order drawn from the selection's seed.
    """
    FIRST = "first"
    RANDOM = "random"


def as_method(method):
    """SelectionMethod from a member or its name ("nfirst", ...)."""
    if isinstance(method, SelectionMethod):
        return method
    try:
        return SelectionMethod(str(method).lower())
    except ValueError:
        raise ValueError(
            f"Unknown selection method '{method}'. "
            f"Use one of {[m.value for m in SelectionMethod]}."
        ) from None


def as_ties_method(ties_method):
    """TiesMethod from a member or its name ("first" or "random")."""
    if isinstance(ties_method, TiesMethod):
        return ties_method
    try:
        return TiesMethod(str(ties_method).lower())
    except ValueError:
        raise ValueError(
            f"Unknown ties method '{ties_method}'. "
            f"Use one of {[t.value for t in TiesMethod]}."
        ) from None


def rank(values, ties_method=TiesMethod.FIRST, random_state=None):
    """Ascending ranks 1..n of values, ties broken by ties_method.

    Parameters
    ----------
    values : np.ndarray
        1D array of flows.
    ties_method : TiesMethod
    random_state : np.random.RandomState, optional
        Source of the random order for TiesMethod.RANDOM.

    Returns
    -------
    np.ndarray
        Float ranks, all distinct.
    """
    values = np.asarray(values)
    if as_ties_method(ties_method) is TiesMethod.FIRST:
        return pd.Series(values).rank(method="first").values

    if random_state is None:
        random_state = np.random.RandomState()
    order = random_state.permutation(len(values))
    shuffled_ranks = pd.Series(values[order]).rank(method="first").values
    ranks = np.empty(len(values), dtype=float)
    ranks[order] = shuffled_ranks
    return ranks


def nfirst(values, k, ties_method=TiesMethod.FIRST, random_state=None):
    """Keep the k largest positive flows, all of them if there are fewer."""
    if k < 0:
        raise ValueError(f"nfirst needs a non-negative number of flows, got {k}")
    values = np.asarray(values)
    positive = values > 0
    keep = np.zeros(len(values), dtype=bool)
    candidates = np.flatnonzero(positive)
    if len(candidates) <= k:
        keep[candidates] = True
        return keep

    ranks = rank(values[candidates], ties_method, random_state)
    keep[candidates[ranks > len(candidates) - k]] = True
    return keep


def xfirst(values, k, ties_method=None, random_state=None):
    """Keep the positive flows strictly greater than k."""
    values = np.asarray(values)
    return (values > 0) & (values > k)


def xsumfirst(values, k, ties_method=None, random_state=None):
    """Keep the largest positive flows until their sum reaches k.

    The kept flows are the shortest prefix of the positive flows, sorted
    in decreasing order, whose cumulative sum is at least k. When k is
    beyond the total of the positive flows, all of them are kept.
    """
    values = np.asarray(values)
    keep = np.zeros(len(values), dtype=bool)
    candidates = np.flatnonzero(values > 0)
    if len(candidates) == 0:
        return keep

    # stable sort: equal flows keep their order of appearance
    order = candidates[np.argsort(-values[candidates], kind="stable")]
    cumulative = np.cumsum(values[order])
    n_keep = min(np.count_nonzero(cumulative < k) + 1, len(order))
    keep[order[:n_keep]] = True
    return keep


SELECTORS = {
    SelectionMethod.NFIRST: nfirst,
    SelectionMethod.XFIRST: xfirst,
    SelectionMethod.XSUMFIRST: xsumfirst,
}


def selector(method):
    """The vector selection function implementing a SelectionMethod."""
    return SELECTORS[as_method(method)]
