"""
convergence.py - Analisi dei campi di temperatura risolti

Calcola:
- Difetto del laplaciano discreto sulle celle interne
- Statistiche di temperatura
- Differenze tra i campi prodotti da metodi diversi
"""

import numpy as np
from itertools import combinations
from typing import Dict, Tuple, Mapping

from ..core.errors import DimensionMismatchError


def laplacian_residual(T: np.ndarray) -> np.ndarray:
    """
    Difetto dello stencil a 5 punti per ogni cella interna:

        R_P = T_U + T_D + T_L + T_R - 4*T_P

    È nullo (a meno di arrotondamenti) quando il campo è all'equilibrio.
    Calcolo Jacobi (nessun aggiornamento in place).
    """
    T = np.asarray(T, dtype=np.float64)
    if T.ndim != 2 or T.shape[0] < 3 or T.shape[1] < 3:
        raise DimensionMismatchError(f"Serve un campo 2D almeno 3x3, ricevuto {T.shape}")
    return (T[:-2, 1:-1] + T[2:, 1:-1] + T[1:-1, :-2] + T[1:-1, 2:]
            - 4.0 * T[1:-1, 1:-1])


def residual_norm(T: np.ndarray) -> float:
    """Norma euclidea del difetto del laplaciano"""
    return float(np.linalg.norm(laplacian_residual(T)))


def get_temperature_stats(T: np.ndarray) -> Dict[str, float]:
    """Statistiche delle celle interne"""
    interior = np.asarray(T, dtype=np.float64)[1:-1, 1:-1]
    return {
        'T_min': float(interior.min()),
        'T_max': float(interior.max()),
        'T_mean': float(interior.mean()),
        'T_std': float(interior.std()),
    }


def max_difference(T1: np.ndarray, T2: np.ndarray) -> float:
    """Massima differenza assoluta tra due campi della stessa forma"""
    T1 = np.asarray(T1)
    T2 = np.asarray(T2)
    if T1.shape != T2.shape:
        raise DimensionMismatchError(f"Forme diverse: {T1.shape} != {T2.shape}")
    return float(np.abs(T1 - T2).max())


def compare_methods(results: Mapping) -> Dict[Tuple[str, str], float]:
    """
    Differenze massime a coppie tra i campi finali dei metodi.

    Args:
        results: nome -> MethodResult (output di run_methods) o nome -> array
    """
    fields = {name: getattr(res, 'T', res) for name, res in results.items()}
    return {
        (a, b): max_difference(fields[a], fields[b])
        for a, b in combinations(fields, 2)
    }


def is_monotonic_rows(T: np.ndarray, strict: bool = True) -> bool:
    """True se ogni riga cresce da sinistra a destra"""
    diffs = np.diff(np.asarray(T, dtype=np.float64), axis=1)
    return bool(np.all(diffs > 0) if strict else np.all(diffs >= 0))
