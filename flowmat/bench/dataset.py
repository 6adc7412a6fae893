"""Named links of a flow analysis and the @evaluate_datasets decorator.

A flow analysis is a chain: a long-format table of flow records, the square
matrix built from it, selection masks derived from the matrix, tables of
statistics derived from the masks. Each link is a Dataset of one kind that
either holds in-memory data or knows how to compute it from the links
before it. Functions decorated with @evaluate_datasets accept a Dataset
wherever they accept the raw data.
"""

from dataclasses import dataclass, field
from typing import Callable

from flowmat.utils import get_logger

LOG = get_logger("dataset")

KINDS = ("records", "matrix", "mask", "table")


@dataclass
class Dataset:
    """A named piece of flow data.

    Parameters
    ----------
    name : str
        Human-readable name.
    kind : str
        One of "records" (long-format flows), "matrix" (square flow matrix),
        "mask" (0/1 selection over a matrix) or "table" (anything else).
    description : str, optional
        What this dataset contains.
    """

    name: str
    kind: str = "table"
    description: str = None

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(
                f"Unknown dataset kind '{self.kind}' for '{self.name}', "
                f"expected one of {KINDS}")

    def define(self):
        """Serializable definition of this dataset, for provenance."""
        return {
            "class": self.__class__.__qualname__,
            "name": self.name,
            "kind": self.kind,
            "description": self.description or "Not provided",
        }

    @property
    def value(self):
        try:
            return self._value
        except AttributeError:
            raise RuntimeError(
                f"Dataset '{self.name}' has no data: attach some with .with_data()"
            ) from None

    def with_data(self, data):
        """Attach in-memory data to this dataset. Returns self for chaining."""
        self._value = data
        return self

    def derive(self, name, computation, kind="matrix", **params):
        """The next link of the chain: computation applied to this dataset."""
        return GeneratedDataset(name=name, kind=kind, inputs=[self],
                                computation=computation, params=params)


@dataclass
class GeneratedDataset(Dataset):
    """A dataset derived from computation on other datasets.

    A flow matrix built from records, or a selection mask computed from
    that matrix, is a GeneratedDataset. The computation runs once, on the
    first access to .value.

    Parameters
    ----------
    inputs : list of Dataset
        The datasets this computation depends on.
    computation : callable
        A function that takes the input values and returns the output.
    params : dict, optional
        Additional keyword arguments to pass to the computation.
    """

    kind: str = "matrix"
    inputs: list = field(default_factory=list)
    computation: Callable = None
    params: dict = field(default_factory=dict)

    def generate(self):
        """Run the computation to produce this dataset's value."""
        if self.computation is None:
            raise ValueError(f"No computation defined for dataset '{self.name}'")

        input_values = [inp.value if isinstance(inp, Dataset) else inp
                        for inp in self.inputs]

        LOG.info("Generating %s '%s' from %d inputs",
                 self.kind, self.name, len(input_values))
        self._value = self.computation(*input_values, **self.params)
        return self._value

    @property
    def value(self):
        try:
            return self._value
        except AttributeError:
            return self.generate()

    def define(self):
        definition = super().define()
        definition["inputs"] = [
            inp.define() if isinstance(inp, Dataset) else str(inp)
            for inp in self.inputs
        ]
        computation = getattr(self.computation, "__wrapped__", self.computation)
        definition["computation"] = (
            f"{computation.__module__}.{computation.__qualname__}"
            if hasattr(computation, "__qualname__")
            else str(computation)
        )
        definition["params"] = {k: str(v) for k, v in self.params.items()}
        return definition


def evaluate_datasets(method):
    """Decorator: unwrap Dataset arguments to their .value before calling.

    Only Dataset instances are unwrapped; a Series named "value" passes
    through untouched.
    """

    def _unwrap(arg):
        return arg.value if isinstance(arg, Dataset) else arg

    def wrapper(*args, **kwargs):
        unwrapped_args = tuple(_unwrap(a) for a in args)
        unwrapped_kwargs = {k: _unwrap(v) for k, v in kwargs.items()}
        return method(*unwrapped_args, **unwrapped_kwargs)

    wrapper.__name__ = method.__name__
    wrapper.__qualname__ = method.__qualname__
    wrapper.__doc__ = method.__doc__
    wrapper.__module__ = method.__module__
    wrapper.__wrapped__ = method
    return wrapper
