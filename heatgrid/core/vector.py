"""
vector.py - Vettore numerico a lunghezza fissa

Buffer float64 con le operazioni richieste dai solutori iterativi:
somma/sottrazione in place, scalatura (nuova o in place), prodotto
scalare e norma euclidea.
"""

import numpy as np
from typing import Union

from .errors import DimensionMismatchError


class Vector:
    """
    Vettore a lunghezza fissa.

    Le operazioni binarie richiedono operandi della stessa lunghezza,
    altrimenti sollevano DimensionMismatchError.
    """

    __slots__ = ("values",)

    def __init__(self, values):
        values = np.array(values, dtype=np.float64)
        if values.ndim != 1:
            raise DimensionMismatchError(
                f"Serve un array 1D, ricevuto forma {values.shape}"
            )
        self.values = values

    @classmethod
    def zeros(cls, n: int) -> "Vector":
        """Vettore nullo di lunghezza n"""
        return cls(np.zeros(n, dtype=np.float64))

    def __len__(self) -> int:
        return self.values.shape[0]

    def __getitem__(self, idx: int) -> float:
        return float(self.values[idx])

    def __setitem__(self, idx: int, value: float):
        self.values[idx] = value

    def __repr__(self):
        return f"Vector(len={len(self)}, norm={self.norm():.3e})"

    def _check_length(self, other: "Vector"):
        if len(other) != len(self):
            raise DimensionMismatchError(
                f"Lunghezze diverse: {len(self)} != {len(other)}"
            )

    # =========================================================================
    # OPERAZIONI IN PLACE
    # =========================================================================

    def add(self, other: "Vector") -> "Vector":
        """self += other"""
        self._check_length(other)
        self.values += other.values
        return self

    def subtract(self, other: "Vector") -> "Vector":
        """self -= other"""
        self._check_length(other)
        self.values -= other.values
        return self

    def scale_inplace(self, factor: float) -> "Vector":
        """self *= factor (usato per ricostruire la direzione del CG)"""
        self.values *= factor
        return self

    # =========================================================================
    # OPERAZIONI CHE RESTITUISCONO NUOVI VALORI
    # =========================================================================

    def scale(self, factor: float) -> "Vector":
        """Restituisce un nuovo vettore factor * self"""
        return Vector(self.values * factor)

    def dot(self, other: "Vector") -> float:
        self._check_length(other)
        return float(np.dot(self.values, other.values))

    def norm(self) -> float:
        """Norma euclidea"""
        return float(np.linalg.norm(self.values))

    def copy(self) -> "Vector":
        return Vector(self.values.copy())


VectorLike = Union[Vector, np.ndarray]


def as_vector(v: VectorLike) -> Vector:
    """Converte array NumPy o liste in Vector (senza copia se già Vector)"""
    if isinstance(v, Vector):
        return v
    return Vector(v)
