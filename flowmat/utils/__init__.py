"""
Simple utilities used by analysis code.
"""
from .logging import get_logger, current_level, LEVELS
