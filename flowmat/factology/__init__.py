"""factology — Structured measurements of flow matrices.

Every measurement is a Fact: a named, described, typed value. A Factology
is a collection of Facts about a subject; MatrixFacts is the one for a
flow matrix.
"""

from .fact import Fact, fact, topological, distributional
from .factology import Factology, MatrixFacts
