"""
main.py - Script principale per il confronto dei metodi sulla griglia 2D

Esempio di workflow completo:
1. Crea la griglia con il bordo di riferimento
2. Configura i tre metodi (Local Updates, Iterative Solver, Iterative Solver CG)
3. Li fa avanzare a tick finché convergono
4. Confronta i campi finali
"""

import numpy as np
import sys
import time
from pathlib import Path

# Aggiungi la root del progetto al path
sys.path.insert(0, str(Path(__file__).parent))

from heatgrid.core.grid import create_default_grid
from heatgrid.solver.methods import SolverConfig, make_methods
from heatgrid.solver.driver import run_methods
from heatgrid.analysis.convergence import compare_methods, get_temperature_stats, residual_norm


def run_simulation(M: int = 20, N: int = 20, eps: float = 1e-3,
                   use_sparse: bool = True, alpha_scaling: float = 1.0):
    """Esegue il confronto completo dei tre metodi"""

    print("=" * 70)
    print("HEAT GRID - STEADY STATE DIFFUSION")
    print("=" * 70)

    # =========================================================================
    # 1. GRIGLIA
    # =========================================================================
    print("\n[1/3] Creazione griglia...")

    grid = create_default_grid(M, N)
    info = grid.get_info()
    print(f"  Celle: {M} x {N}")
    print(f"  Celle interne (incognite): {info['interior_cells']:,}")

    # =========================================================================
    # 2. SOLUZIONE
    # =========================================================================
    print("\n[2/3] Avanzamento metodi...")

    config = SolverConfig(
        eps=eps,
        use_sparse=use_sparse,
        alpha_scaling=alpha_scaling,
        verbose=True,
    )

    t_start = time.time()
    results = run_methods(grid, make_methods(config), config)

    for name, result in results.items():
        stats = get_temperature_stats(result.T)
        print(f"\n  {name}{' (converged)' if result.converged else ''}")
        print(f"    Iterazioni: {result.iterations}")
        print(f"    Errore riportato: {result.error:.2e}")
        print(f"    Residuo laplaciano: {residual_norm(result.T):.2e}")
        print(f"    T interna: {stats['T_min']:.3f} - {stats['T_max']:.3f} (media {stats['T_mean']:.3f})")
        print(f"    Tempo: {result.solve_time:.3f} s")

    # =========================================================================
    # 3. CONFRONTO
    # =========================================================================
    print("\n[3/3] Confronto tra metodi...")

    for (a, b), diff in compare_methods(results).items():
        print(f"  max|{a} - {b}| = {diff:.2e}")

    # =========================================================================
    # SOMMARIO
    # =========================================================================
    print("\n" + "=" * 70)
    print("SOMMARIO")
    print("=" * 70)
    print(f"  Tempo totale: {time.time() - t_start:.2f} s")
    for name, result in results.items():
        print(f"  {name}: {result.iterations} iterazioni {'✓' if result.converged else '✗'}")
    print("=" * 70)

    return grid, results


def run_quick_test():
    """Test rapido con griglia molto piccola"""
    print("=== Quick Test ===")

    grid = create_default_grid(8, 8)
    results = run_methods(grid, config=SolverConfig(eps=1e-6))

    for name, result in results.items():
        print(f"{name}: {result.iterations} iterazioni, "
              f"T range {np.min(result.T):.3f} - {np.max(result.T):.3f}")

    return results


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Heat Grid Simulation")
    parser.add_argument("--quick", action="store_true", help="Run quick test")
    parser.add_argument("--rows", type=int, default=20, help="Grid rows (M)")
    parser.add_argument("--cols", type=int, default=20, help="Grid columns (N)")
    parser.add_argument("--eps", type=float, default=1e-3, help="Convergence threshold")
    parser.add_argument("--dense", action="store_true", help="Use dense matrices")
    parser.add_argument("--alpha-scaling", type=float, default=1.0,
                        help="Richardson step damping in (0, 1]")

    args = parser.parse_args()

    if args.quick:
        run_quick_test()
    else:
        run_simulation(args.rows, args.cols, args.eps,
                       use_sparse=not args.dense, alpha_scaling=args.alpha_scaling)
