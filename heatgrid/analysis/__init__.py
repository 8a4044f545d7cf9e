"""
Package analysis - Analisi post-processing
"""

from .convergence import (
    laplacian_residual,
    residual_norm,
    get_temperature_stats,
    max_difference,
    compare_methods,
    is_monotonic_rows,
)

__all__ = [
    'laplacian_residual',
    'residual_norm',
    'get_temperature_stats',
    'max_difference',
    'compare_methods',
    'is_monotonic_rows',
]
