"""
driver.py - Avanzamento cooperativo di più metodi sulla stessa griglia

=============================================================================
TICK LOOP
=============================================================================

Headless counterpart of the animation loop: every tick calls step() once on
each method that has not finished yet, then hands control back (optional
progress callback). Methods never advance on their own.

    grid  ──copy──> method_1.init()   ┐
          ──copy──> method_2.init()   ├─ tick: step() on unfinished methods
          ──copy──> method_3.init()   ┘

Each method owns a private copy of the initial grid, so the in-place sweep
of 'Local Updates' is never observed by the projection of the linear
methods. The loop stops when all methods are finished or after max_ticks.

Results are keyed by method name; repeated names get a ' #2', ' #3', ...
suffix in the order the methods are given.
=============================================================================
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Callable, Dict, Any, List, Union
import time

from ..core.grid import HeatGrid
from .methods import SolverConfig, SolverMethod, make_methods


@dataclass
class MethodResult:
    """Risultato di un metodo al termine del loop"""
    name: str                       # Nome del metodo
    T: np.ndarray                   # Campo di temperatura finale
    converged: bool                 # Convergenza raggiunta
    iterations: int                 # Numero di iterazioni
    error: float                    # Ultimo errore riportato
    solve_time: float               # Tempo cumulato negli step [s]
    info: Dict[str, Any] = field(default_factory=dict)


def unique_labels(methods: List[SolverMethod]) -> List[str]:
    """
    Etichette dei risultati: il nome del metodo, con suffisso ' #2', ' #3', ...
    per i nomi ripetuti (es. due 'Iterative Solver' con alpha_scaling diversi).
    """
    labels: List[str] = []
    for method in methods:
        label, n = method.name, 1
        while label in labels:
            n += 1
            label = f"{method.name} #{n}"
        labels.append(label)
    return labels


def run_methods(grid: Union[HeatGrid, np.ndarray],
                methods: Optional[List[SolverMethod]] = None,
                config: Optional[SolverConfig] = None,
                max_ticks: int = 100000,
                progress_callback: Optional[Callable] = None) -> Dict[str, MethodResult]:
    """
    Esegue i metodi a tick finché tutti sono finished.

    Args:
        grid: Griglia iniziale (bordo impostato); non viene modificata
        methods: Metodi da confrontare (default: make_methods(config))
        config: Configurazione (eps, sparse/dense, verbose, ...)
        max_ticks: Numero massimo di tick
        progress_callback: callback(tick, methods), chiamata dopo ogni tick

    Returns:
        Dizionario etichetta (vedi unique_labels) -> MethodResult
    """
    config = config if config is not None else SolverConfig()
    methods = methods if methods is not None else make_methods(config)
    if not isinstance(grid, HeatGrid):
        grid = HeatGrid.from_array(grid)

    for method in methods:
        method.init(grid, config.eps)

    labels = unique_labels(methods)
    if config.verbose:
        kinds = sorted({method.matrix_kind for method in methods if hasattr(method, 'matrix_kind')})
        if kinds:
            print(f"[DRIVER] Uso matrici {'/'.join(kinds)}.")
        print(f"[DRIVER] Variabili: {grid.n_interior:,}")

    elapsed = [0.0] * len(methods)
    tick = 0
    while tick < max_ticks and not all(method.finished for method in methods):
        tick += 1
        for k, method in enumerate(methods):
            if method.finished:
                continue
            t_start = time.time()
            method.step()
            elapsed[k] += time.time() - t_start
            if method.finished and config.verbose:
                print(f"[DRIVER] Metodo {labels[k]} terminato dopo "
                      f"{method.iteration} iterazioni (err={method.err:.2e})")
        if progress_callback is not None:
            progress_callback(tick, methods)

    if config.verbose and not all(method.finished for method in methods):
        print(f"[ATTENZIONE] Limite di {max_ticks} tick raggiunto")

    results = {}
    for k, method in enumerate(methods):
        info = {'ticks': tick}
        if hasattr(method, 'residual_norm'):
            info['residual_norm'] = method.residual_norm
        results[labels[k]] = MethodResult(
            name=labels[k],
            T=method.T.copy(),
            converged=method.converged,
            iterations=method.iteration,
            error=method.err,
            solve_time=elapsed[k],
            info=info,
        )
    return results
