"""
methods.py - Metodi di soluzione con contratto comune init/step

=============================================================================
MODULE OVERVIEW
=============================================================================

Each method wraps one strategy behind the same minimal contract used by the
driver:

    init(grid, eps)     copy the grid, prepare the internal state
    step() -> err       one iteration, returns the reported error
    iteration           completed steps (starts at 0)
    finished            True once converged (or iteration cap reached)
    name                label of the strategy
    grid / T            current temperature field

METHODS AVAILABLE:
    - LocalUpdatesMethod       ('Local Updates')       in-place relaxation
    - IterativeSolverMethod    ('Iterative Solver')    Richardson on (A, b)
    - ConjugateGradientMethod  ('Iterative Solver CG') CG on (A, b)

The relaxation method never touches Matrix/Vector/matrix_builder. The two
linear methods build (A, b) once at init and project x onto their own grid
copy after every step.

USAGE:
    config = SolverConfig(eps=1e-3, use_sparse=True)
    method = ConjugateGradientMethod(config)
    method.init(grid)
    while not method.finished:
        method.step()
=============================================================================
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple, Union, List

from ..core.errors import DimensionMismatchError
from ..core.grid import HeatGrid
from ..core.matrix import LinearOperatorLike, SparseMatrix
from ..core.vector import Vector
from .matrix_builder import build_interior_system, project_solution
from .relaxation import gauss_seidel_sweep
from .iterative import RichardsonSolver, ConjugateGradientSolver


@dataclass
class SolverConfig:
    """Configurazione dei metodi di soluzione

    Attributes:
        eps: Soglia di convergenza sull'errore riportato da step().
            - 1e-3: default, sufficiente per visualizzazione
            - 1e-6 o meno: alta precisione, più iterazioni

        use_sparse: Matrice sparsa (True) o densa (False) per i metodi lineari.
            La densa ha costo O(N^2) per prodotto: solo per griglie piccole.

        alpha_scaling: Smorzamento del passo di Richardson, in (0, 1].
            Valori < 1 (es. 0.35) evitano l'andamento a zig-zag.

        omega: Fattore di rilassamento per Local Updates, in (0, 2).
            - 1.0: rilassamento semplice (Gauss-Seidel)
            - 1 < omega < 2: sovra-rilassamento (SOR)

        max_iterations: Limite di sicurezza sulle iterazioni (0 = nessun limite).
            Al raggiungimento il metodo è finished ma non converged.

        warm_start: Se True i metodi lineari partono dalle temperature interne
            correnti invece che da x = 0.

        verbose: Se True, stampa informazioni di progresso.
    """
    eps: float = 1e-3
    use_sparse: bool = True
    alpha_scaling: float = 1.0
    omega: float = 1.0
    max_iterations: int = 0
    warm_start: bool = False
    verbose: bool = False

    def __post_init__(self):
        if self.eps <= 0:
            raise ValueError(f"eps deve essere positivo, ricevuto {self.eps}")
        if not (0.0 < self.alpha_scaling <= 1.0):
            raise ValueError(f"alpha_scaling deve essere in (0, 1], ricevuto {self.alpha_scaling}")
        if not (0.0 < self.omega < 2.0):
            raise ValueError(f"omega deve essere in (0, 2), ricevuto {self.omega}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations non può essere negativo: {self.max_iterations}")


class SolverMethod(Protocol):
    """Contratto comune dei metodi (usato dal driver)"""
    name: str
    iteration: int
    finished: bool
    converged: bool
    err: float
    grid: Optional[HeatGrid]

    def init(self, grid, eps: Optional[float] = None) -> "SolverMethod": ...

    def step(self) -> float: ...


def _copy_grid(grid: Union[HeatGrid, np.ndarray]) -> HeatGrid:
    """Ogni metodo lavora su una copia propria della griglia iniziale"""
    if isinstance(grid, HeatGrid):
        return grid.copy()
    return HeatGrid.from_array(grid)


class _MethodState:
    """Stato di avanzamento comune: contatore, errore, flag di convergenza"""

    name = ''

    def __init__(self, config: Optional[SolverConfig] = None):
        self.config = config if config is not None else SolverConfig()
        self.eps = self.config.eps
        self.err = np.inf
        self.iteration = 0
        self.finished = False
        self.converged = False
        self.grid: Optional[HeatGrid] = None

    @property
    def T(self) -> np.ndarray:
        return self.grid.T

    def _require_init(self):
        if self.grid is None:
            raise RuntimeError(f"Metodo '{self.name}' non inizializzato: chiamare init()")

    def _update_state(self, err: float):
        self.err = err
        self.iteration += 1
        if err < self.eps:
            self.finished = True
            self.converged = True
        elif self.config.max_iterations and self.iteration >= self.config.max_iterations:
            self.finished = True
            if self.config.verbose:
                print(f"[ATTENZIONE] {self.name}: limite di {self.config.max_iterations} "
                      f"iterazioni raggiunto (err={err:.2e})")

    def __repr__(self):
        state = 'converged' if self.converged else ('finished' if self.finished else 'running')
        return f"{type(self).__name__}(name='{self.name}', iteration={self.iteration}, " \
               f"err={self.err:.3e}, {state})"


class LocalUpdatesMethod(_MethodState):
    """
    Rilassamento locale: aggiorna la griglia direttamente, cella per cella.

    Stati: Running -> Converged quando l'errore dello sweep scende sotto eps.
    """

    name = 'Local Updates'

    def init(self, grid, eps: Optional[float] = None) -> "LocalUpdatesMethod":
        self.grid = _copy_grid(grid)
        if eps is not None:
            self.eps = eps
        return self

    def step(self) -> float:
        self._require_init()
        err = float(gauss_seidel_sweep(self.grid.T, self.config.omega))
        self._update_state(err)
        return err


class _LinearSystemMethod(_MethodState):
    """
    Metodo basato sul sistema lineare delle celle interne.

    Il sistema (A, b) viene costruito una volta in init() dal bordo della
    griglia (che non cambia più) oppure fornito già pronto.
    """

    def __init__(self, config: Optional[SolverConfig] = None):
        super().__init__(config)
        self.solver = None

    def _create_solver(self, A: LinearOperatorLike, b: Vector, x0: Optional[Vector]):
        raise NotImplementedError

    def init(self, grid, eps: Optional[float] = None,
             system: Optional[Tuple[LinearOperatorLike, Vector]] = None) -> "_LinearSystemMethod":
        """
        Args:
            grid: HeatGrid o array (M, N) con il bordo già impostato
            eps: Soglia di convergenza (default: config.eps)
            system: (A, b) già costruiti; devono avere dimensione (M-2)(N-2)

        Raises:
            DimensionMismatchError: se system non è compatibile con la griglia
        """
        self.grid = _copy_grid(grid)
        if eps is not None:
            self.eps = eps

        if system is None:
            A, b = build_interior_system(self.grid.T, self.grid.M, self.grid.N,
                                         use_sparse=self.config.use_sparse)
        else:
            A, b = system
            if A.N != self.grid.n_interior:
                raise DimensionMismatchError(
                    f"Matrice {A.N}x{A.N} incompatibile con griglia "
                    f"{self.grid.M}x{self.grid.N} ({self.grid.n_interior} celle interne)"
                )

        x0 = Vector(self.grid.flatten_interior()) if self.config.warm_start else None
        self.solver = self._create_solver(A, b, x0)

        if self.config.verbose:
            print(f"[BUILD] {self.name}: sistema {A.N:,} x {A.N:,} ({self.matrix_kind})")
        return self

    @property
    def matrix_kind(self) -> str:
        """'sparse' o 'dense', secondo la matrice effettivamente in uso"""
        self._require_init()
        return 'sparse' if isinstance(self.solver.A, SparseMatrix) else 'dense'

    @property
    def x(self) -> Vector:
        return self.solver.x

    @property
    def residual_norm(self) -> float:
        return self.solver.residual_norm

    def step(self) -> float:
        self._require_init()
        err = float(self.solver.step())
        project_solution(self.grid.T, self.solver.x, self.grid.M, self.grid.N)
        self._update_state(err)
        return err


class IterativeSolverMethod(_LinearSystemMethod):
    """Richardson (discesa più ripida) sul sistema delle celle interne"""

    name = 'Iterative Solver'

    def _create_solver(self, A, b, x0):
        return RichardsonSolver(A, b, alpha_scaling=self.config.alpha_scaling, x0=x0)


class ConjugateGradientMethod(_LinearSystemMethod):
    """Gradiente Coniugato sul sistema delle celle interne"""

    name = 'Iterative Solver CG'

    def _create_solver(self, A, b, x0):
        return ConjugateGradientSolver(A, b, x0=x0)


METHOD_REGISTRY = {
    'local': LocalUpdatesMethod,
    'richardson': IterativeSolverMethod,
    'cg': ConjugateGradientMethod,
}


def create_method(kind: str, config: Optional[SolverConfig] = None):
    """Crea un metodo per nome: 'local', 'richardson', 'cg'"""
    try:
        method_cls = METHOD_REGISTRY[kind.lower()]
    except KeyError:
        raise ValueError(f"Metodo non supportato: {kind}. Usare: {', '.join(METHOD_REGISTRY)}") from None
    return method_cls(config)


def make_methods(config: Optional[SolverConfig] = None) -> List[SolverMethod]:
    """I tre metodi a confronto: Local Updates, Iterative Solver, Iterative Solver CG"""
    return [create_method(kind, config) for kind in METHOD_REGISTRY]
