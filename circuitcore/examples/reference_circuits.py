"""
Reference DC circuits solved and read back with the multimeter.

Circuits:
    series          6 V -> 3 Ω -> 3 Ω
    parallel        6 V -> (3 Ω || 6 Ω)
    mixed           12 V -> 2 Ω -> (4 Ω || 6 Ω) -> 2 Ω
    double parallel 12 V -> (2 Ω || 4 Ω) -> (3 Ω || 6 Ω)
    ladder          10 V -> 1 Ω -> (2 Ω || 1 Ω)
    complex mixed   15 V -> 1 Ω -> (3 Ω || 6 Ω) -> 2 Ω -> (4 Ω || 1 Ω)
    open switch     12 V -> 4 Ω -> open switch -> 2 Ω, with 6 Ω across the source

Each circuit is validated first, then solved, then every component is probed
across its own terminals.
"""

import logging
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from circuitcore.network.graph import Circuit
from circuitcore.probe import Multimeter
from circuitcore.solver import solve
from circuitcore.validation import validate


def series() -> Circuit:
    c = Circuit()
    c.source("Battery", "n1", "n3", emf=6.0)
    c.resistor("R1", "n1", "n2", ohms=3.0)
    c.resistor("R2", "n2", "n3", ohms=3.0)
    return c


def parallel() -> Circuit:
    c = Circuit()
    c.source("Battery", "n1", "n2", emf=6.0)
    c.resistor("R1", "n1", "n2", ohms=3.0)
    c.resistor("R2", "n1", "n2", ohms=6.0)
    return c


def mixed() -> Circuit:
    c = Circuit()
    c.source("Battery", "n1", "n4", emf=12.0)
    c.resistor("R1", "n1", "n2", ohms=2.0)
    c.resistor("R2", "n2", "n3", ohms=4.0)
    c.resistor("R3", "n2", "n3", ohms=6.0)
    c.resistor("R4", "n3", "n4", ohms=2.0)
    return c


def double_parallel() -> Circuit:
    c = Circuit()
    c.source("Battery", "n1", "n3", emf=12.0)
    c.resistor("R1", "n1", "n2", ohms=2.0)
    c.resistor("R2", "n1", "n2", ohms=4.0)
    c.resistor("R3", "n2", "n3", ohms=3.0)
    c.resistor("R4", "n2", "n3", ohms=6.0)
    return c


def ladder() -> Circuit:
    c = Circuit()
    c.source("Battery", "n1", "n3", emf=10.0)
    c.resistor("R1", "n1", "n2", ohms=1.0)
    c.resistor("R2", "n2", "n3", ohms=2.0)
    c.resistor("R3", "n2", "n3", ohms=1.0)
    return c


def complex_mixed() -> Circuit:
    c = Circuit()
    c.source("Battery", "n1", "n5", emf=15.0)
    c.resistor("R1", "n1", "n2", ohms=1.0)
    c.resistor("R2", "n2", "n3", ohms=3.0)
    c.resistor("R3", "n2", "n3", ohms=6.0)
    c.resistor("R4", "n3", "n4", ohms=2.0)
    c.resistor("R5", "n4", "n5", ohms=4.0)
    c.resistor("R6", "n4", "n5", ohms=1.0)
    return c


def open_switch() -> Circuit:
    c = Circuit()
    c.source("Battery", "n1", "n4", emf=12.0)
    c.resistor("R1", "n1", "n2", ohms=4.0)
    c.switch("SW", "n2", "n3", closed=False)
    c.resistor("R2", "n3", "n4", ohms=2.0)
    c.resistor("R3", "n1", "n4", ohms=6.0)
    return c


CIRCUITS = {
    "series": series,
    "parallel": parallel,
    "mixed": mixed,
    "double parallel": double_parallel,
    "ladder": ladder,
    "complex mixed": complex_mixed,
    "open switch": open_switch,
}


def main() -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    meter = Multimeter()

    for label, build in CIRCUITS.items():
        circuit = build()
        report = validate(circuit)
        result = solve(circuit)
        totals = meter.totals(circuit)

        print(f"--- {label.upper()} ---")
        if not report.is_valid or report.has_warnings:
            print(report.summary())
        print(meter.report(circuit))
        print(f"Total: {totals.voltage:.2f} V, {totals.current:.3f} A, "
              f"{totals.power:.3f} W, R_eq = {totals.resistance:.3f} Ω "
              f"({result.iterations} sweeps, converged={result.converged})")
        print()


if __name__ == "__main__":
    main()
