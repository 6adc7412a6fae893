"""flowmat — Flow Matrix Analysis Toolkit.

Filter, describe and compare matrices of directed flows between spatial
units: commuters, migrants, freight. Major flows and dominant flows are
selected as 0/1 masks; the filtered matrices are then described as graphs
and as distributions of flows.

Subpackages:
    bench       Dataset management and lazy evaluation
    matrix      Long-format flow tables to square matrices
    selection   Major flows (nfirst, xfirst, xsumfirst) and dominant flows
    statistics  Weak connectivity, degrees, flow distributions, comparison
    factology   Structured factsheets of flow matrices
    utils       Logging
"""

__version__ = "0.1.0"
