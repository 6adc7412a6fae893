"""matrix — Square flow matrices from long-format flow tables.

Build the origin x destination matrix, and the small pure helpers that
reshape it: diagonal removal, melting back to long format, row and column
totals.
"""

from .build import (
    InputShapeError,
    check_square,
    to_flow_matrix,
    prepare_flows,
    zero_diagonal,
    melt_flows,
    flow_sums,
)
