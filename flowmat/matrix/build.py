"""Flow matrix preparation: long-format flow records to a square matrix.

A flow record is one row of a table with an origin id, a destination id and
a flow intensity (commuters, migrants, phone calls...). The matrix has one
row and one column per spatial unit, rows being origins, and holds the
summed intensity of every (origin, destination) pair, 0 where no record
exists.

All helpers return new objects; none of them modifies its input.
"""

import numpy as np
import pandas as pd
from pandas.api.types import is_integer_dtype

from flowmat.bench.dataset import evaluate_datasets
from flowmat.utils import get_logger

LOG = get_logger("matrix.build")


class InputShapeError(ValueError):
    """Input data does not have the structure an operation requires.

    Raised for flow tables that lack a required column, matrices that are
    not square with matching row and column ids, pairs of matrices that
    cannot be compared, and weight vectors that do not align with a matrix.
    """


def check_square(mat, name="matrix"):
    """Raise InputShapeError unless mat is a square matrix over one id set.

    Parameters
    ----------
    mat : pd.DataFrame
        Candidate flow matrix.
    name : str
        How to refer to the matrix in the error message.
    """
    if not isinstance(mat, pd.DataFrame):
        raise InputShapeError(
            f"{name} must be a pandas DataFrame, got {type(mat).__name__}")
    n_rows, n_cols = mat.shape
    if n_rows != n_cols:
        raise InputShapeError(f"{name} is not square: {n_rows} x {n_cols}")
    if not mat.index.equals(mat.columns):
        raise InputShapeError(
            f"{name} rows and columns are not indexed by the same ordered ids")
    return mat


def to_flow_matrix(data, ids=None):
    """Coerce a square array or DataFrame into a validated flow matrix.

    Parameters
    ----------
    data : pd.DataFrame or array-like
        Square matrix of non-negative flows.
    ids : sequence of str, optional
        Unit ids for a bare array. Defaults to "0", "1", ...

    Returns
    -------
    pd.DataFrame
    """
    if isinstance(data, pd.DataFrame):
        mat = data
    else:
        values = np.asarray(data)
        if values.ndim != 2:
            raise InputShapeError(f"Flow matrix must be 2D, got {values.ndim}D")
        if ids is None:
            ids = [str(n) for n in range(values.shape[0])]
        if len(ids) != values.shape[0]:
            raise InputShapeError(
                f"{len(ids)} ids given for a matrix with {values.shape[0]} rows")
        mat = pd.DataFrame(values, index=list(ids), columns=list(ids))
    check_square(mat)
    if (mat.values < 0).any():
        raise ValueError("Flow matrix holds negative values")
    return mat


@evaluate_datasets
def prepare_flows(flows, i="i", j="j", fij="fij"):
    """Build a square flow matrix from a long-format flow table.

    Every id seen as an origin or a destination gets a row and a column,
    so a unit that only receives flows still has a (zero) row. Rows and
    columns share the same sorted id ordering. Duplicated pairs are summed.

    Parameters
    ----------
    flows : pd.DataFrame
        Long-format table of flows.
    i : str
        Origin column name.
    j : str
        Destination column name.
    fij : str
        Flow intensity column name.

    Returns
    -------
    pd.DataFrame
        Square matrix, origins as rows and destinations as columns.
    """
    missing = [c for c in (i, j, fij) if c not in flows.columns]
    if missing:
        raise InputShapeError(f"Flow table lacks column(s): {missing}")

    records = flows[[i, j, fij]].copy()
    records.columns = ["i", "j", "fij"]
    records["i"] = records["i"].astype(str)
    records["j"] = records["j"].astype(str)
    integer_flows = is_integer_dtype(records["fij"])
    # plain float64 so that nullable and narrow integer columns sum safely
    records["fij"] = records["fij"].to_numpy(dtype="float64", na_value=np.nan)
    if (records["fij"] < 0).any():
        raise ValueError(f"Column '{fij}' holds negative flows")

    units = sorted(set(records["i"]) | set(records["j"]))
    if not units:
        LOG.warning("Empty flow table: returning an empty matrix")
        return pd.DataFrame(dtype=float)

    # Cross product of units, so absent pairs survive the aggregation as 0
    pairs = pd.MultiIndex.from_product([units, units], names=["i", "j"])
    full = pairs.to_frame(index=False).merge(records, on=["i", "j"], how="left")

    matrix = (full.groupby(["i", "j"])["fij"]
              .sum()
              .unstack(fill_value=0)
              .reindex(index=units, columns=units, fill_value=0))
    matrix = matrix.astype(np.int64 if integer_flows else np.float64)

    LOG.info("Built %d x %d flow matrix from %d records, total flows: %s",
             matrix.shape[0], matrix.shape[1], len(records),
             f"{matrix.values.sum():,.0f}")
    return matrix


@evaluate_datasets
def zero_diagonal(mat):
    """Copy of a flow matrix with its self-flows set to 0."""
    check_square(mat)
    values = mat.values.copy()
    np.fill_diagonal(values, 0)
    return pd.DataFrame(values, index=mat.index, columns=mat.columns)


@evaluate_datasets
def melt_flows(mat, i="i", j="j", fij="fij"):
    """Back to long format, keeping only the positive cells.

    This is the shape a map layer needs to draw one segment per flow.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix (or a mask-filtered one, mask * matrix).

    Returns
    -------
    pd.DataFrame
        Columns i, j, fij (names configurable), ordered by origin then
        destination as in the matrix.
    """
    check_square(mat)
    values = mat.values
    rows, cols = np.nonzero(values > 0)
    return pd.DataFrame({
        i: np.asarray(mat.index)[rows],
        j: np.asarray(mat.columns)[cols],
        fij: values[rows, cols],
    })


@evaluate_datasets
def flow_sums(mat):
    """Outgoing and incoming flow totals per unit.

    Returns
    -------
    pd.DataFrame
        Indexed by unit id, columns sum_out (row sums) and sum_in
        (column sums).
    """
    check_square(mat)
    return pd.DataFrame({
        "sum_out": mat.sum(axis=1),
        "sum_in": mat.sum(axis=0),
    })
