"""
relaxation.py - Rilassamento locale (sweep Gauss-Seidel in place)

Ogni sweep visita le celle interne per righe crescenti e, dentro ogni riga,
per colonne crescenti:

    delta = omega * 0.25 * (T_U + T_D + T_L + T_R - 4*T_P)
    T_P  += delta

I vicini vengono letti dall'array nel momento della lettura: le celle già
aggiornate nello stesso sweep (sopra e a sinistra) contribuiscono con il
valore nuovo. È quindi uno schema Gauss-Seidel, non Jacobi.

Con omega = 1 si ottiene il rilassamento semplice; 1 < omega < 2 dà SOR.
L'errore dello sweep è sqrt(sum(delta^2)).
"""

import numpy as np
from numba import njit


@njit(cache=True)
def gauss_seidel_sweep(T: np.ndarray, omega: float = 1.0) -> float:
    """
    Esegue uno sweep completo sulle celle interne di T (modificato in place).

    Returns:
        Norma euclidea degli incrementi applicati
    """
    M, N = T.shape
    err = 0.0
    for i in range(1, M - 1):
        for j in range(1, N - 1):
            delta = omega * 0.25 * (T[i - 1, j] + T[i + 1, j] + T[i, j - 1] + T[i, j + 1]
                                    - 4.0 * T[i, j])
            err += delta * delta
            T[i, j] += delta
    return np.sqrt(err)
