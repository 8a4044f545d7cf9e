"""
Package heatgrid - Diffusione del calore stazionaria su griglia 2D
"""

from .core import (
    HeatGrid, Vector, DenseMatrix, SparseMatrix, create_matrix,
    DimensionMismatchError, BoundaryConfigurationError,
    create_default_grid, create_linear_gradient_grid, create_uniform_boundary_grid
)

from .solver import (
    SolverConfig, LocalUpdatesMethod, IterativeSolverMethod, ConjugateGradientMethod,
    RichardsonSolver, ConjugateGradientSolver,
    build_interior_system, project_solution, solve_direct,
    make_methods, create_method, run_methods, MethodResult
)

from .analysis import compare_methods, residual_norm, get_temperature_stats

__version__ = "0.1.0"
__author__ = "Heat Grid Simulation Team"
