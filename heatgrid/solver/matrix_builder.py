"""
matrix_builder.py - Costruzione del sistema lineare delle celle interne

=============================================================================
MODULE OVERVIEW
=============================================================================

This module assembles the linear system A·x = b whose solution is the
steady-state temperature of the interior cells of an M x N grid with fixed
(Dirichlet) boundary.

KEY EQUATION:
    Steady-state:   ∇²T = 0

DISCRETIZATION:
    5-point stencil on a uniform 2D grid. For each interior cell P with
    neighbours U, D, L, R:

        4·T_P - T_U - T_D - T_L - T_R = 0

    A neighbour lying on the boundary is known: its value moves to the
    right-hand side instead of producing a matrix entry.

        A[p, p] = 4
        A[p, q] = -1        q = interior neighbour of p
        b[p]   += T_bc      for each boundary neighbour of p

    A is symmetric positive definite, as required by Conjugate Gradient.

INDEXING CONVENTION:
    Column-major (Fortran) numbering of the interior cells:
        p = (i-1) + (j-1)*(M-2)
        i = 1 + p mod (M-2),  j = 1 + p div (M-2)

    The same mapping is used by build_interior_system() and by
    project_solution().
=============================================================================
"""

import numpy as np
from typing import Tuple

from ..core.errors import DimensionMismatchError
from ..core.grid import check_grid_dimensions, interior_size
from ..core.matrix import Matrix, SparseMatrix, create_matrix
from ..core.vector import Vector, VectorLike, as_vector

# Flag per usare la versione vettorizzata (solo matrici sparse)
USE_VECTORIZED = True

# Offset dei 4 vicini: sopra, sotto, sinistra, destra
NEIGHBORS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def _check_field(T: np.ndarray, M: int, N: int) -> np.ndarray:
    check_grid_dimensions(M, N)
    T = np.asarray(T)
    if T.shape != (M, N):
        raise DimensionMismatchError(f"Campo di forma {T.shape}, attesa ({M}, {N})")
    return T


def to_row(idx: int, M: int) -> int:
    return 1 + idx % (M - 2)


def to_col(idx: int, M: int) -> int:
    return 1 + idx // (M - 2)


def to_idx(row: int, col: int, M: int) -> int:
    return (row - 1) + (col - 1) * (M - 2)


def build_interior_system(T: np.ndarray, M: int, N: int,
                          use_sparse: bool = True) -> Tuple[Matrix, Vector]:
    """
    Costruisce matrice e termine noto per le celle interne.

    Args:
        T: Campo di temperatura (M, N); si leggono solo le celle di bordo
        M, N: Dimensioni della griglia
        use_sparse: Matrice sparsa (True) o densa (False)

    Returns:
        A: Matrice (M-2)(N-2) x (M-2)(N-2)
        b: Vettore dei termini noti

    Raises:
        BoundaryConfigurationError: griglia senza celle interne
        DimensionMismatchError: T non ha forma (M, N)
    """
    T = _check_field(T, M, N)
    if use_sparse and USE_VECTORIZED:
        return _build_interior_system_vectorized(T, M, N)
    return _build_interior_system_loop(T, M, N, use_sparse)


def _build_interior_system_loop(T: np.ndarray, M: int, N: int,
                                use_sparse: bool = True) -> Tuple[Matrix, Vector]:
    """
    Versione con loop Python: assemblaggio incrementale con set().
    Funziona con entrambe le rappresentazioni di matrice.
    """
    T = _check_field(T, M, N)
    n = interior_size(M, N)
    A = create_matrix(n, use_sparse)
    b = Vector.zeros(n)

    for idx in range(n):
        row, col = to_row(idx, M), to_col(idx, M)
        for di, dj in NEIGHBORS:
            i, j = row + di, col + dj
            if i == 0 or i == M - 1 or j == 0 or j == N - 1:
                b[idx] = b[idx] + T[i, j]
            else:
                A.set(idx, to_idx(i, j, M), -1.0)
        A.set(idx, idx, 4.0)

    return A, b


def _build_interior_system_vectorized(T: np.ndarray, M: int, N: int) -> Tuple[SparseMatrix, Vector]:
    """
    Versione vettorizzata (NumPy): triplette COO per tutti i vicini in una volta.

    Il termine noto viene accumulato nello stesso ordine dei vicini della
    versione con loop, quindi b è identico bit a bit.
    """
    T = _check_field(T, M, N).astype(np.float64, copy=False)
    n = interior_size(M, N)

    # Coordinate delle celle interne in ordine Fortran: p = 0, 1, ..., n-1
    ii, jj = np.meshgrid(np.arange(1, M - 1), np.arange(1, N - 1), indexing='ij')
    ii = ii.ravel(order='F')
    jj = jj.ravel(order='F')
    p_all = (ii - 1) + (jj - 1) * (M - 2)

    b = np.zeros(n, dtype=np.float64)
    row_list = [p_all]
    col_list = [p_all]
    data_list = [np.full(n, 4.0)]

    for di, dj in NEIGHBORS:
        ni = ii + di
        nj = jj + dj
        on_boundary = (ni == 0) | (ni == M - 1) | (nj == 0) | (nj == N - 1)

        # Vicino di bordo -> termine noto
        b[on_boundary] += T[ni[on_boundary], nj[on_boundary]]

        # Vicino interno -> coefficiente -1
        valid = ~on_boundary
        row_list.append(p_all[valid])
        col_list.append((ni[valid] - 1) + (nj[valid] - 1) * (M - 2))
        data_list.append(np.full(int(valid.sum()), -1.0))

    rows = np.concatenate(row_list)
    cols = np.concatenate(col_list)
    data = np.concatenate(data_list)

    return SparseMatrix.from_coo(rows, cols, data, n), Vector(b)


def project_solution(T: np.ndarray, x: VectorLike, M: int, N: int) -> np.ndarray:
    """
    Scrive la soluzione x nelle celle interne di T (in place).

    Inversa dell'indicizzazione usata da build_interior_system():
        T[to_row(p), to_col(p)] = x[p]

    Returns:
        T (lo stesso array, per comodità)

    Raises:
        TypeError: T non è un array NumPy float (la scrittura andrebbe persa
            su una copia temporanea o verrebbe troncata)
    """
    if not isinstance(T, np.ndarray) or not np.issubdtype(T.dtype, np.floating):
        raise TypeError(
            f"T deve essere un np.ndarray float modificabile in place, ricevuto "
            f"{type(T).__name__}{'' if not isinstance(T, np.ndarray) else ' ' + str(T.dtype)}"
        )
    T = _check_field(T, M, N)
    values = as_vector(x).values
    n = interior_size(M, N)
    if values.shape[0] != n:
        raise DimensionMismatchError(
            f"Soluzione di lunghezza {values.shape[0]}, attese {n} celle interne"
        )
    T[1:-1, 1:-1] = values.reshape((M - 2, N - 2), order='F')
    return T
