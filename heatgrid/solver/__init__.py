"""
Package solver - Solutori per l'equazione del calore stazionaria 2D
"""

from .matrix_builder import build_interior_system, project_solution
from .relaxation import gauss_seidel_sweep
from .iterative import RichardsonSolver, ConjugateGradientSolver, solve_direct
from .methods import (
    SolverConfig, SolverMethod,
    LocalUpdatesMethod, IterativeSolverMethod, ConjugateGradientMethod,
    create_method, make_methods
)
from .driver import MethodResult, run_methods, unique_labels

__all__ = [
    'build_interior_system',
    'project_solution',
    'gauss_seidel_sweep',
    'RichardsonSolver',
    'ConjugateGradientSolver',
    'solve_direct',
    'SolverConfig',
    'SolverMethod',
    'LocalUpdatesMethod',
    'IterativeSolverMethod',
    'ConjugateGradientMethod',
    'create_method',
    'make_methods',
    'MethodResult',
    'run_methods',
    'unique_labels',
]
