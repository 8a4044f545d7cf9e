"""
grid.py - Classe HeatGrid per la griglia di temperature 2D

Implementa una griglia cartesiana M x N con:
- Bordo a temperatura fissa (Dirichlet), celle interne incognite
- Mapping indici 2D <-> 1D sulle sole celle interne
- Factory per le configurazioni di bordo più usate
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Tuple, Dict, Any, Union

from .errors import BoundaryConfigurationError, DimensionMismatchError


EDGES = ('top', 'bottom', 'left', 'right')


def interior_size(M: int, N: int) -> int:
    """Numero di celle interne: M*N - 2*(M+N) + 4 = (M-2)*(N-2)"""
    return M * N - 2 * (M + N) + 4


def check_grid_dimensions(M: int, N: int):
    """Rifiuta griglie senza celle interne (M o N < 3)"""
    if M < 3 or N < 3 or interior_size(M, N) <= 0:
        raise BoundaryConfigurationError(
            f"Griglia {M}x{N} senza celle interne: servono almeno 3x3 celle"
        )


@dataclass
class HeatGrid:
    """
    Griglia 2D di temperature con bordo fisso.

    Attributes:
        M, N: Numero di righe e colonne (bordo incluso)
        initial_interior: Temperatura iniziale delle celle interne
        T: Campo di temperatura (M, N), float64
        n_interior: Numero di incognite (M-2)*(N-2)

    INDICIZZAZIONE:
        Le celle interne sono numerate in ordine column-major (Fortran):
            p = (i-1) + (j-1)*(M-2)
        con i = riga in [1, M-2], j = colonna in [1, N-2].
    """

    M: int = 20
    N: int = 20
    initial_interior: float = 0.0

    T: np.ndarray = field(init=False, repr=False)
    n_interior: int = field(init=False)

    def __post_init__(self):
        """Valida le dimensioni e alloca il campo"""
        check_grid_dimensions(self.M, self.N)
        self.n_interior = interior_size(self.M, self.N)
        self.T = np.zeros((self.M, self.N), dtype=np.float64)
        self.T[1:-1, 1:-1] = self.initial_interior

    @classmethod
    def from_array(cls, T: np.ndarray) -> "HeatGrid":
        """Crea una griglia copiando un array 2D esistente"""
        T = np.asarray(T, dtype=np.float64)
        if T.ndim != 2:
            raise DimensionMismatchError(f"Serve un array 2D, ricevuto ndim={T.ndim}")
        grid = cls(M=T.shape[0], N=T.shape[1])
        grid.T[:] = T
        return grid

    # =========================================================================
    # METODI DI INDICIZZAZIONE
    # =========================================================================

    def ij_to_linear(self, i: int, j: int) -> int:
        """Converte (riga, colonna) interne in indice lineare"""
        if not (1 <= i <= self.M - 2 and 1 <= j <= self.N - 2):
            raise IndexError(f"Cella ({i}, {j}) non interna alla griglia {self.M}x{self.N}")
        return (i - 1) + (j - 1) * (self.M - 2)

    def linear_to_ij(self, p: int) -> Tuple[int, int]:
        """Converte indice lineare in (riga, colonna)"""
        if not (0 <= p < self.n_interior):
            raise IndexError(f"Indice {p} fuori da [0, {self.n_interior})")
        return 1 + p % (self.M - 2), 1 + p // (self.M - 2)

    def is_boundary(self, i: int, j: int) -> bool:
        return i == 0 or i == self.M - 1 or j == 0 or j == self.N - 1

    def boundary_mask(self) -> np.ndarray:
        mask = np.ones((self.M, self.N), dtype=bool)
        mask[1:-1, 1:-1] = False
        return mask

    # =========================================================================
    # CONDIZIONI AL CONTORNO
    # =========================================================================

    def set_fixed_temperature_bc(self, edge: str, T: Union[float, np.ndarray]):
        """
        Imposta temperatura fissa su un lato della griglia.

        Args:
            edge: 'top', 'bottom', 'left', 'right'
            T: Temperatura scalare o profilo (lunghezza N per top/bottom,
               M per left/right)
        """
        if edge == 'top':
            target = self.T[0, :]
        elif edge == 'bottom':
            target = self.T[-1, :]
        elif edge == 'left':
            target = self.T[:, 0]
        elif edge == 'right':
            target = self.T[:, -1]
        else:
            raise ValueError(f"Lato non valido: {edge}. Usare: top, bottom, left, right")

        values = np.asarray(T, dtype=np.float64)
        if values.ndim > 0 and values.shape != target.shape:
            raise DimensionMismatchError(
                f"Profilo di lunghezza {values.shape[0]} per lato '{edge}' "
                f"di lunghezza {target.shape[0]}"
            )
        target[:] = values

    def fill_interior(self, value: float):
        """Imposta tutte le celle interne a un valore uniforme"""
        self.T[1:-1, 1:-1] = value

    # =========================================================================
    # CONVERSIONI CAMPO <-> VETTORE
    # =========================================================================

    def interior(self) -> np.ndarray:
        """Vista (non copia) delle celle interne"""
        return self.T[1:-1, 1:-1]

    def flatten_interior(self) -> np.ndarray:
        """Celle interne come vettore 1D (ordine column-major / Fortran)"""
        return self.T[1:-1, 1:-1].ravel(order='F')

    def unflatten_interior(self, vector: np.ndarray):
        """Scrive un vettore 1D nelle celle interne"""
        vector = np.asarray(vector, dtype=np.float64)
        if vector.shape != (self.n_interior,):
            raise DimensionMismatchError(
                f"Vettore di lunghezza {vector.size}, attese {self.n_interior} celle interne"
            )
        self.T[1:-1, 1:-1] = vector.reshape((self.M - 2, self.N - 2), order='F')

    # =========================================================================
    # METODI UTILITY
    # =========================================================================

    def copy(self) -> "HeatGrid":
        """Copia indipendente (nessun aliasing del campo)"""
        return HeatGrid.from_array(self.T)

    def get_info(self) -> Dict[str, Any]:
        """Restituisce informazioni sulla griglia"""
        return {
            'cells': (self.M, self.N),
            'interior_cells': self.n_interior,
            'T_min': float(self.T.min()),
            'T_max': float(self.T.max()),
        }


# =============================================================================
# FACTORY
# =============================================================================

def create_default_grid(M: int = 20, N: int = 20) -> HeatGrid:
    """
    Configurazione di riferimento: lato sinistro caldo (1) per intero,
    lato destro caldo dalla metà (arrotondata per eccesso) in giù, resto a 0.
    """
    grid = HeatGrid(M=M, N=N)
    grid.T[:, 0] = 1.0
    grid.T[int(np.floor(M / 2 + 0.5)):, N - 1] = 1.0
    return grid


def create_linear_gradient_grid(M: int, N: int,
                                t_left: float = 0.0,
                                t_right: float = 1.0,
                                initial_interior: float = 0.0) -> HeatGrid:
    """
    Lati sinistro/destro a temperatura fissa, lati superiore/inferiore
    interpolati linearmente tra i due. La soluzione esatta è lineare in j.
    """
    grid = HeatGrid(M=M, N=N, initial_interior=initial_interior)
    profile = np.linspace(t_left, t_right, N)
    grid.set_fixed_temperature_bc('top', profile)
    grid.set_fixed_temperature_bc('bottom', profile)
    grid.set_fixed_temperature_bc('left', t_left)
    grid.set_fixed_temperature_bc('right', t_right)
    return grid


def create_uniform_boundary_grid(M: int, N: int, value: float,
                                 initial_interior: float = 0.0) -> HeatGrid:
    """Tutto il bordo allo stesso valore"""
    grid = HeatGrid(M=M, N=N, initial_interior=initial_interior)
    for edge in EDGES:
        grid.set_fixed_temperature_bc(edge, value)
    return grid
