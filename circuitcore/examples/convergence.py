"""
Relaxation convergence on a resistor ladder.

Circuit:
    Vs (9 V) -> R (1 Ω) -> node k -> R (1 Ω) -> ... -> ground, with a 2 Ω rung
    from every intermediate node to ground.

The longer the ladder, the more Gauss-Seidel sweeps the solver needs; with the
default budget of 100 sweeps long ladders stop before the tolerance is met and
the result is flagged as approximate. The script prints the sweep count for a
few lengths and plots the per-sweep voltage change of the longest one.
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from circuitcore.network.graph import Circuit
from circuitcore.solver import SolverConfig, solve


def ladder(sections: int, emf: float = 9.0) -> Circuit:
    c = Circuit()
    c.source("Vs", "n0", "gnd", emf=emf)
    for k in range(sections):
        c.resistor(f"Rs{k}", f"n{k}", f"n{k + 1}", ohms=1.0)
        c.resistor(f"Rp{k}", f"n{k + 1}", "gnd", ohms=2.0)
    return c


def main() -> None:
    cfg = SolverConfig()
    result = None
    for sections in (2, 5, 10, 20, 40):
        circuit = ladder(sections)
        result = solve(circuit, cfg)
        source = circuit["Vs"]
        print(f"{sections:3d} sections: {result.iterations:3d} sweeps, "
              f"converged={result.converged}, last change {result.max_delta:.2e} V, "
              f"I_source = {source.current:.4f} A")

    try:
        import matplotlib.pyplot as plt

        plt.figure(figsize=(7, 4))
        plt.semilogy(range(1, len(result.history) + 1), result.history)
        plt.axhline(cfg.tol, color="k", linestyle="--", label="tolerance")
        plt.xlabel("Sweep")
        plt.ylabel("Largest voltage change [V]")
        plt.title("Gauss-Seidel convergence, 40-section ladder")
        plt.grid(True)
        plt.legend()
        plt.tight_layout()
        plt.show()
    except ImportError:
        pass


if __name__ == "__main__":
    main()
