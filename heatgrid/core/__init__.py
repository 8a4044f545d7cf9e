"""
Package core - Strutture dati fondamentali (griglia, vettori, matrici)
"""

from .errors import DimensionMismatchError, BoundaryConfigurationError
from .vector import Vector, as_vector
from .matrix import DenseMatrix, SparseMatrix, LinearOperatorLike, create_matrix
from .grid import (
    HeatGrid, interior_size, check_grid_dimensions,
    create_default_grid, create_linear_gradient_grid, create_uniform_boundary_grid
)

__all__ = [
    'DimensionMismatchError',
    'BoundaryConfigurationError',
    'Vector',
    'as_vector',
    'DenseMatrix',
    'SparseMatrix',
    'LinearOperatorLike',
    'create_matrix',
    'HeatGrid',
    'interior_size',
    'check_grid_dimensions',
    'create_default_grid',
    'create_linear_gradient_grid',
    'create_uniform_boundary_grid',
]
