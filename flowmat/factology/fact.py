"""Fact: one named, described measurement of a flow matrix.

A Fact carries its value together with what it is (name, unit) and how it
was measured (the docstring of the method that computed it), so a
factsheet can be exported without losing meaning.
"""

from collections import namedtuple
from functools import wraps


# ---------------------------------------------------------------------------
# The Fact namedtuple
# ---------------------------------------------------------------------------

class Fact(namedtuple("Fact", ["label", "name", "description", "unit", "value"])):
    """A single measurement with its metadata.

    Fields
    ------
    label : str
        Machine-readable identifier (the method name).
    name : str
        Human-readable name (e.g., "Number of links").
    description : str
        What was measured (the method's docstring).
    unit : str or None
        Unit of measurement (e.g., "links", "units", None).
    value : any
        The measured value.
    """

    def __str__(self):
        unit_str = f" {self.unit}" if self.unit else ""
        return f"{self.name}: {self.value}{unit_str}"

    def to_dict(self):
        """Convert to a plain dict for serialization."""
        return self._asdict()


# ---------------------------------------------------------------------------
# @fact(name, unit): wrap a method's return value in a Fact
# ---------------------------------------------------------------------------

def fact(name, unit=None):
    """Decorator factory: wrap a method's return value as a Fact.

    Usage::

        @fact("Number of links", "links")
        def link_count(self):
            '''Number of positive cells.'''
            return int((self.matrix.values > 0).sum())
    """
    def decorator(method):
        @wraps(method)
        def wrapper(self):
            return Fact(
                label=method.__name__,
                name=name,
                description=(method.__doc__ or "").strip(),
                unit=unit,
                value=method(self),
            )
        wrapper.__defines_a_fact__ = True
        wrapper._fact_name = name
        wrapper._fact_unit = unit
        return wrapper
    return decorator


# ---------------------------------------------------------------------------
# @topological / @distributional: register and cache facts by category
# ---------------------------------------------------------------------------

def _categorized(category):
    def register(method):
        @wraps(method)
        def wrapper(self):
            value = method(self)
            self._facts_by_category.setdefault(category, []).append(value)
            return value
        wrapper.__defines_a_fact__ = True
        wrapper.__fact_type__ = category
        return _cached(wrapper)
    return register


topological = _categorized("topological")
topological.__doc__ = """Register a fact about the graph of flows and cache it.

Topological facts count units, links and connected components.
"""

distributional = _categorized("distributional")
distributional.__doc__ = """Register a fact about the flow intensities and cache it.

Distributional facts summarize the values carried by the links.
"""


def _cached(method):
    """Compute a fact once per object, then return the stored value."""
    attr_name = f"_cached_{method.__name__}"

    @wraps(method)
    def wrapper(self):
        if not hasattr(self, attr_name):
            setattr(self, attr_name, method(self))
        return getattr(self, attr_name)

    for attr in ('__defines_a_fact__', '__fact_type__', '_fact_name', '_fact_unit'):
        if hasattr(method, attr):
            setattr(wrapper, attr, getattr(method, attr))
    return wrapper
