"""selection — Major and dominant flow selection masks.

Major flows are the largest flows of each origin (first_flows) or of the
whole matrix (first_flows_global). Dominant flows go from a unit to a
heavier one (dom_flows). Every selector returns a 0/1 mask shaped like the
matrix, to be multiplied with it.
"""

from .methods import (
    SelectionMethod,
    TiesMethod,
    nfirst,
    xfirst,
    xsumfirst,
)
from .first import (
    first_flows,
    first_flows_global,
)
from .dominance import (
    dom_flows,
    node_roles,
)
from .config import (
    SelectionConfig,
    select_flows,
)
