"""
iterative.py - Solutori iterativi generici per A·x = b

=============================================================================
MODULE OVERVIEW
=============================================================================

Two step-wise solvers working only through matrix-vector products, so they
accept either DenseMatrix or SparseMatrix:

    RichardsonSolver         - steepest descent on the residual
                               x += alpha·r,   alpha = s·(r·r)/(r·A·r)
    ConjugateGradientSolver  - CG with search direction p
                               x += alpha·p,   alpha = (r·r)/(p·A·p)

Both require A symmetric positive definite (guaranteed by matrix_builder).

REPORTED ERROR:
    step() returns norm(update vector)·alpha, i.e. norm(r)·alpha for
    Richardson and norm(p)·alpha for CG. This is a convergence heuristic
    that shrinks with the step width near the solution; it is NOT a bound on
    the true error. The raw residual norm is available as `residual_norm`.

A direct solver (solve_direct) is provided as reference/oracle.
=============================================================================
"""

import numpy as np
import scipy.linalg
from scipy.sparse import linalg as splinalg
from typing import Optional

from ..core.errors import DimensionMismatchError
from ..core.matrix import LinearOperatorLike, Matrix, SparseMatrix
from ..core.vector import Vector, VectorLike, as_vector


def _check_system(A: LinearOperatorLike, b: Vector, x0: Optional[Vector]):
    if A.N != len(b):
        raise DimensionMismatchError(
            f"dimension mismatch, A ha {A.N} righe ma b ha lunghezza {len(b)}"
        )
    if x0 is not None and len(x0) != len(b):
        raise DimensionMismatchError(
            f"dimension mismatch, x0 ha lunghezza {len(x0)} ma b ha lunghezza {len(b)}"
        )


class RichardsonSolver:
    """
    Solutore iterativo di Richardson (discesa più ripida).

    Attributes:
        x: Soluzione corrente (parte da zero o da x0)
        r: Residuo corrente r = b - A·x
        alpha_scaling: Smorzamento del passo in (0, 1]. Valori < 1
            (es. 0.35) riducono l'andamento a zig-zag vicino alla soluzione.
    """

    name = 'Richardson'

    def __init__(self, A: LinearOperatorLike, b: VectorLike,
                 alpha_scaling: float = 1.0,
                 x0: Optional[VectorLike] = None):
        b = as_vector(b)
        x0 = as_vector(x0) if x0 is not None else None
        _check_system(A, b, x0)
        if not (0.0 < alpha_scaling <= 1.0):
            raise ValueError(f"alpha_scaling deve essere in (0, 1], ricevuto {alpha_scaling}")

        self.A = A
        self.b = b
        self.alpha_scaling = alpha_scaling

        if x0 is None:
            self.x = Vector.zeros(len(b))
            self.r = b.copy()
        else:
            self.x = x0.copy()
            self.r = b.copy().subtract(A.multiply(self.x))

    @property
    def residual_norm(self) -> float:
        return self.r.norm()

    def step(self) -> float:
        """
        Un passo di Richardson. Restituisce norm(r)·alpha (vedi MODULE OVERVIEW).
        """
        Ar = self.A.multiply(self.r)  # Costo dominante: usare matrici sparse
        rAr = self.r.dot(Ar)
        if rAr == 0.0:
            # r = 0: sistema già risolto
            return 0.0

        alpha = self.alpha_scaling * self.r.dot(self.r) / rAr
        self.x.add(self.r.scale(alpha))     # x(t+1) = x(t) + alpha*r(t)
        self.r.subtract(Ar.scale(alpha))    # r(t+1) = r(t) - alpha*A*r(t)
        return self.r.norm() * alpha


class ConjugateGradientSolver:
    """
    Solutore a Gradiente Coniugato.

    Per A simmetrica definita positiva di dimensione N converge in al più N
    passi in aritmetica esatta; in virgola mobile il numero di passi per
    scendere sotto la soglia può variare leggermente.

    Attributes:
        x: Soluzione corrente
        r: Residuo corrente
        p: Direzione di ricerca corrente (inizialmente uguale al residuo)
    """

    name = 'Conjugate Gradient'

    def __init__(self, A: LinearOperatorLike, b: VectorLike,
                 x0: Optional[VectorLike] = None):
        b = as_vector(b)
        x0 = as_vector(x0) if x0 is not None else None
        _check_system(A, b, x0)

        self.A = A
        self.b = b

        if x0 is None:
            self.x = Vector.zeros(len(b))
            self.r = b.copy()
        else:
            self.x = x0.copy()
            self.r = b.copy().subtract(A.multiply(self.x))
        self.p = self.r.copy()

    @property
    def residual_norm(self) -> float:
        return self.r.norm()

    def step(self) -> float:
        """
        Un passo di CG. Restituisce norm(p)·alpha (vedi MODULE OVERVIEW).
        """
        Ap = self.A.multiply(self.p)  # Costo dominante: usare matrici sparse
        r_sq = self.r.dot(self.r)
        pAp = self.p.dot(Ap)
        if r_sq == 0.0 or pAp == 0.0:
            # Residuo o direzione nulli: sistema già risolto
            return 0.0

        alpha = r_sq / pAp
        self.x.add(self.p.scale(alpha))     # x(t+1) = x(t) + alpha*p(t)
        self.r.subtract(Ap.scale(alpha))    # r(t+1) = r(t) - alpha*A*p(t)
        beta = self.r.dot(self.r) / r_sq
        self.p.scale_inplace(beta)          # p(t+1) = r(t+1) + beta*p(t)
        self.p.add(self.r)
        return self.p.norm() * alpha


def solve_direct(A: Matrix, b: VectorLike) -> Vector:
    """
    Soluzione diretta (riferimento per la verifica dei solutori iterativi).

    Sparsa: fattorizzazione LU con scipy.sparse.linalg.spsolve.
    Densa: eliminazione di Gauss con scipy.linalg.solve.
    """
    b = as_vector(b)
    _check_system(A, b, None)
    if isinstance(A, SparseMatrix):
        x = splinalg.spsolve(A.tocsr().tocsc(), b.values)
    else:
        x = scipy.linalg.solve(A.toarray(), b.values, assume_a='pos')
    return Vector(np.atleast_1d(x))
