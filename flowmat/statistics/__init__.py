"""statistics — Graph and distribution statistics of flow matrices.

Weak connectivity, degrees and flow distribution of one matrix
(matrix_stats), side-by-side comparison of two (compare_matrices), and the
series behind rank-size and Lorenz plots.
"""

from .connectivity import (
    MatrixStats,
    matrix_stats,
    weak_components,
    rank_size,
    lorenz_curve,
)
from .compare import (
    compare_matrices,
)
