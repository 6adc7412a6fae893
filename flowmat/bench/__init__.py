"""bench — named flow tables, matrices and masks.

A Dataset holds one link of a flow analysis, in memory or computed on
demand from earlier links. The @evaluate_datasets decorator lets analysis
functions accept either raw data or Dataset objects transparently.
"""

from .dataset import (
    KINDS,
    Dataset,
    GeneratedDataset,
    evaluate_datasets,
)
