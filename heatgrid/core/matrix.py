"""
matrix.py - Operatori lineari quadrati (denso e sparso)

=============================================================================
MODULE OVERVIEW
=============================================================================

Two interchangeable representations of a square N x N operator:

    DenseMatrix   - full NumPy array, for small grids and verification
    SparseMatrix  - non-zeros only (scipy.sparse DOK for assembly,
                    CSR for products)

Both satisfy the same capability (`LinearOperatorLike`):

    multiply(vector) -> vector
    set(row, col, value)
    get(row, col)            (implicit zero for unset entries)

The choice is made at construction time through `create_matrix(n, use_sparse)`
instead of a class hierarchy. For the 5-point stencil each row holds at most
5 non-zeros, so the sparse product costs O(N) instead of O(N^2).
=============================================================================
"""

import numpy as np
from scipy import sparse
from typing import Protocol, Union

from .errors import DimensionMismatchError
from .vector import Vector, VectorLike, as_vector


class LinearOperatorLike(Protocol):
    """Capacità comune a matrici dense e sparse"""
    N: int

    def multiply(self, vector: VectorLike) -> Vector: ...

    def set(self, row: int, col: int, value: float) -> None: ...

    def get(self, row: int, col: int) -> float: ...


def _check_index(n: int, row: int, col: int):
    if not (0 <= row < n and 0 <= col < n):
        raise IndexError(f"Indice ({row}, {col}) fuori da matrice {n}x{n}")


class DenseMatrix:
    """Matrice quadrata densa N x N"""

    def __init__(self, n: int):
        if n <= 0:
            raise DimensionMismatchError(f"Dimensione matrice non valida: {n}")
        self.N = n
        self._data = np.zeros((n, n), dtype=np.float64)

    def set(self, row: int, col: int, value: float):
        _check_index(self.N, row, col)
        self._data[row, col] = value

    def get(self, row: int, col: int) -> float:
        _check_index(self.N, row, col)
        return float(self._data[row, col])

    def multiply(self, vector: VectorLike) -> Vector:
        v = as_vector(vector)
        if len(v) != self.N:
            raise DimensionMismatchError(
                f"Matrice {self.N}x{self.N} e vettore di lunghezza {len(v)}"
            )
        return Vector(self._data @ v.values)

    def toarray(self) -> np.ndarray:
        return self._data.copy()

    @property
    def nnz(self) -> int:
        return int(np.count_nonzero(self._data))


class SparseMatrix:
    """
    Matrice quadrata sparsa N x N.

    Assemblaggio incrementale in formato DOK (dizionario (row, col) -> valore),
    prodotto matrice-vettore in formato CSR. La conversione CSR viene
    ricalcolata solo se la matrice è stata modificata dopo l'ultimo prodotto.
    """

    def __init__(self, n: int):
        if n <= 0:
            raise DimensionMismatchError(f"Dimensione matrice non valida: {n}")
        self.N = n
        self._dok = sparse.dok_matrix((n, n), dtype=np.float64)
        self._csr = None

    @classmethod
    def from_coo(cls, rows, cols, data, n: int) -> "SparseMatrix":
        """
        Costruisce la matrice da triplette COO (usato dal builder vettorizzato).
        Triplette duplicate vengono sommate come in scipy.sparse.
        """
        matrix = cls(n)
        coo = sparse.coo_matrix((data, (rows, cols)), shape=(n, n))
        matrix._csr = coo.tocsr()
        matrix._csr.eliminate_zeros()
        matrix._dok = matrix._csr.todok()
        return matrix

    def set(self, row: int, col: int, value: float):
        _check_index(self.N, row, col)
        self._dok[row, col] = value
        self._csr = None

    def get(self, row: int, col: int) -> float:
        _check_index(self.N, row, col)
        return float(self._dok[row, col])

    def tocsr(self) -> sparse.csr_matrix:
        if self._csr is None:
            self._csr = self._dok.tocsr()
            self._csr.eliminate_zeros()
        return self._csr

    def multiply(self, vector: VectorLike) -> Vector:
        v = as_vector(vector)
        if len(v) != self.N:
            raise DimensionMismatchError(
                f"Matrice {self.N}x{self.N} e vettore di lunghezza {len(v)}"
            )
        return Vector(self.tocsr() @ v.values)

    def toarray(self) -> np.ndarray:
        return self.tocsr().toarray()

    @property
    def nnz(self) -> int:
        return int(self.tocsr().nnz)


Matrix = Union[DenseMatrix, SparseMatrix]


def create_matrix(n: int, use_sparse: bool = True) -> Matrix:
    """Crea una matrice N x N nulla, sparsa o densa secondo il flag"""
    return SparseMatrix(n) if use_sparse else DenseMatrix(n)
