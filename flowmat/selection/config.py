"""Selection settings that can be written down and reloaded.

A SelectionConfig names one selection: its method, its parameter k, its
scope (each origin on its own, or the whole matrix) and the handling of
ties. It can be built from a mapping or a YAML file such as::

    selection:
      method: nfirst
      k: 1
      scope: row
      ties_method: first
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from flowmat.bench.dataset import evaluate_datasets
from flowmat.selection.first import first_flows, first_flows_global
from flowmat.selection.methods import (
    SelectionMethod,
    TiesMethod,
    as_method,
    as_ties_method,
)

SCOPES = ("row", "global")


@dataclass
class SelectionConfig:
    """How to select major flows.

    Attributes
    ----------
    method : SelectionMethod
    k : float
        Number of flows, or flow threshold, depending on method.
    scope : str
        "row" to select per origin, "global" over the whole matrix.
    ties_method : TiesMethod
    seed : int, optional
        Seed for random tie breaking.
    """
    method: SelectionMethod = SelectionMethod.NFIRST
    k: float = 1
    scope: str = "row"
    ties_method: TiesMethod = TiesMethod.FIRST
    seed: Optional[int] = None

    def __post_init__(self):
        self.method = as_method(self.method)
        self.ties_method = as_ties_method(self.ties_method)
        if self.scope not in SCOPES:
            raise ValueError(f"Unknown selection scope '{self.scope}'. Use one of {SCOPES}.")

    @classmethod
    def from_dict(cls, mapping):
        """Build from a mapping, rejecting keys that are not settings."""
        known = {f.name for f in fields(cls)}
        unknown = set(mapping) - known
        if unknown:
            raise ValueError(f"Unknown selection setting(s): {sorted(unknown)}")
        return cls(**mapping)

    @classmethod
    def from_yaml(cls, path):
        """Load from a YAML file, either flat or under a 'selection' key."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Selection config not found: {path}")
        with open(path, "r") as f:
            mapping = yaml.safe_load(f) or {}
        return cls.from_dict(mapping.get("selection", mapping))

    def define(self):
        """Plain-type definition, suitable for YAML or JSON."""
        return {
            "method": self.method.value,
            "k": self.k,
            "scope": self.scope,
            "ties_method": self.ties_method.value,
            "seed": self.seed,
        }

    def to_yaml(self, path):
        with open(path, "w") as f:
            yaml.safe_dump({"selection": self.define()}, f)


@evaluate_datasets
def select_flows(mat, config=None, **settings):
    """Select flows as described by a SelectionConfig.

    Parameters
    ----------
    mat : pd.DataFrame
        Square flow matrix.
    config : SelectionConfig or dict, optional
        The selection. Defaults to the largest flow of each origin.
    **settings
        Overrides for individual settings (method, k, scope, ...).

    Returns
    -------
    pd.DataFrame
        Mask of 0/1, same index and columns as mat.
    """
    if config is None:
        config = SelectionConfig()
    elif not isinstance(config, SelectionConfig):
        config = SelectionConfig.from_dict(config)
    if settings:
        config = SelectionConfig.from_dict({**config.define(), **settings})

    select = first_flows if config.scope == "row" else first_flows_global
    return select(mat, method=config.method, k=config.k,
                  ties_method=config.ties_method, seed=config.seed)
