"""
Test: solver behaviour beyond the reference circuits.

Covers the series/parallel laws, repeated solves, missing or shorted sources,
unreachable nodes, non-convergence and the two ways of deriving wire and
closed-switch currents.
"""
import math
import pytest

from circuitcore import (
    Circuit,
    Node,
    Resistor,
    Severity,
    SolverConfig,
    Source,
    WireCurrentMode,
    solve,
)
from circuitcore.utils import parallel, series
from circuitcore.examples import reference_circuits as ref


@pytest.mark.parametrize("values", [[1.0, 2.0, 3.0], [10.0, 10.0], [2.2, 4.7, 1.0, 3.3]])
def test_series_law(values):
    """Same current everywhere, drops add up to the EMF."""
    emf = 9.0
    c = Circuit()
    c.source("B1", "n0", "gnd", emf=emf)
    for k, r in enumerate(values):
        b = "gnd" if k == len(values) - 1 else f"n{k + 1}"
        c.resistor(f"R{k}", f"n{k}", b, ohms=r)

    result = solve(c)
    i = emf / series(*values)

    assert result.converged
    for k in range(len(values)):
        assert c[f"R{k}"].current == pytest.approx(i, abs=1e-3)
    assert sum(c[f"R{k}"].voltage_drop for k in range(len(values))) == pytest.approx(emf, abs=1e-3)
    assert c["B1"].current == pytest.approx(i, abs=1e-3)


@pytest.mark.parametrize("values", [[3.0, 6.0], [1.0, 2.0, 4.0, 8.0], [10.0, 10.0, 10.0]])
def test_parallel_law(values):
    """Same drop everywhere, source current is the sum of the branches."""
    emf = 6.0
    c = Circuit()
    c.source("B1", "p", "n", emf=emf)
    for k, r in enumerate(values):
        c.resistor(f"R{k}", "p", "n", ohms=r)

    solve(c)

    for k, r in enumerate(values):
        assert c[f"R{k}"].voltage_drop == pytest.approx(emf)
        assert c[f"R{k}"].current == pytest.approx(emf / r)
    assert c["B1"].current == pytest.approx(emf / parallel(*values))


def test_node_current_is_throughput():
    circuit = ref.series()
    solve(circuit)
    assert circuit.node("n2").current == pytest.approx(1.0, abs=1e-3)
    assert circuit.node("n1").current == pytest.approx(1.0, abs=1e-3)


def test_resolve_is_idempotent():
    circuit = ref.mixed()
    solve(circuit)
    first = {c.name: (c.current, c.voltage_drop) for c in circuit}
    volts = [n.voltage for n in circuit.node_list]

    solve(circuit)

    for comp in circuit:
        i, v = first[comp.name]
        assert comp.current == pytest.approx(i, abs=1e-3)
        assert comp.voltage_drop == pytest.approx(v, abs=1e-3)
    assert [n.voltage for n in circuit.node_list] == pytest.approx(volts, abs=1e-3)


def test_missing_source_leaves_graph_unsolved():
    c = Circuit()
    r1 = c.resistor("R1", "a", "b", ohms=1.0)
    r1.current = 5.0

    result = solve(c)

    assert not result.ok
    assert result.source is None
    assert result.codes() == ["missing-source"]
    assert result.diagnostics[0].severity is Severity.WARNING
    assert r1.current == 0.0 and r1.voltage_drop == 0.0
    assert all(math.isnan(n.voltage) for n in c.node_list)


def test_multiple_sources_uses_first():
    c = Circuit()
    c.source("B1", "p", "n", emf=6.0)
    c.resistor("R1", "p", "n", ohms=3.0)
    c.source("B2", "q", "n", emf=9.0)
    c.resistor("R2", "q", "n", ohms=3.0)

    result = solve(c)

    assert result.source == "B1"
    assert "multiple-sources" in result.codes()
    assert c["R1"].current == pytest.approx(2.0)
    assert c["R2"].current == 0.0, "the second source is not driven"
    assert c.node("q").voltage == pytest.approx(0.0)


def test_not_converged_is_flagged():
    """Three sweeps are not enough for a four-resistor chain."""
    c = Circuit()
    c.source("B1", "n0", "n4", emf=12.0)
    for k in range(4):
        c.resistor(f"R{k}", f"n{k}", f"n{k + 1}", ohms=1.0)

    result = solve(c, SolverConfig(max_iter=3))

    assert result.ok
    assert not result.converged
    assert result.iterations == 3
    assert len(result.history) == 3
    assert result.approximate
    assert "not-converged" in result.codes()


def test_convergence_history_decreases():
    circuit = ref.complex_mixed()
    result = solve(circuit)
    assert result.converged
    assert result.max_delta < 1e-6
    assert result.history[-1] == result.max_delta
    assert result.history[0] > result.history[-1]


def test_unreachable_nodes_have_no_voltage():
    c = Circuit()
    c.source("B1", "p", "n", emf=6.0)
    c.resistor("R1", "p", "n", ohms=3.0)
    island = c.resistor("R9", "x", "y", ohms=1.0)

    solve(c)

    assert not c.node("x").is_solved
    assert not c.node("y").is_solved
    assert island.current == 0.0
    assert c["B1"].current == pytest.approx(2.0)


def test_components_outside_the_solved_set_are_ignored():
    """R2 shares B1's terminals but is not passed in; its stale current must not count."""
    p, n = Node("p"), Node("n")
    b1 = Source("B1", p, n, emf=6.0)
    r1 = Resistor("R1", p, n, ohms=3.0)
    r2 = Resistor("R2", p, n, ohms=3.0)
    r2.current = 100.0

    result = solve([b1, r1])

    assert "current-imbalance" not in result.codes()
    assert b1.current == pytest.approx(2.0)
    assert p.current == pytest.approx(2.0)
    assert r2.current == 100.0, "components outside the solved set are not touched"


def test_sink_receives_diagnostics():
    received = []
    c = Circuit()
    c.resistor("R1", "a", "b", ohms=1.0)

    result = solve(c, sink=received.append)

    assert received == result.diagnostics
    assert received[0].code == "missing-source"


def _wired_series():
    """6 V -> wire -> 3 Ω -> 3 Ω -> wire -> back."""
    c = Circuit()
    c.source("B1", "p", "n", emf=6.0)
    c.wire("W1", "p", "a")
    c.resistor("R1", "a", "b", ohms=3.0)
    c.resistor("R2", "b", "c", ohms=3.0)
    c.wire("W2", "c", "n")
    return c


class TestWires:
    @pytest.mark.parametrize("mode", list(WireCurrentMode))
    def test_wires_in_series_carry_the_loop_current(self, mode):
        c = _wired_series()
        result = solve(c, SolverConfig(wire_current=mode))

        assert result.converged
        assert c.node("a").voltage == pytest.approx(6.0)
        assert c.node("c").voltage == pytest.approx(0.0)
        assert c["W1"].current == pytest.approx(1.0, abs=1e-3)
        assert c["W2"].current == pytest.approx(1.0, abs=1e-3)
        assert c["W1"].voltage_drop == 0.0
        assert c["B1"].current == pytest.approx(1.0, abs=1e-3)

    def test_conservation_is_exact_in_series(self):
        result = solve(_wired_series())
        assert not result.approximate

    def test_neighbor_mode_is_approximate(self):
        result = solve(_wired_series(), SolverConfig(wire_current=WireCurrentMode.NEIGHBOR))
        assert result.approximate

    def _junction(self):
        """A single wire feeds two branches: 3 Ω || 6 Ω at 6 V."""
        c = Circuit()
        c.source("B1", "p", "n", emf=6.0)
        c.wire("W1", "p", "a")
        c.resistor("R1", "a", "n", ohms=3.0)
        c.resistor("R2", "a", "n", ohms=6.0)
        return c

    def test_conservation_at_junction(self):
        c = self._junction()
        result = solve(c)

        assert c["W1"].current == pytest.approx(3.0, abs=1e-3)
        assert c["B1"].current == pytest.approx(3.0, abs=1e-3)
        assert "current-imbalance" not in result.codes()

    def test_neighbor_at_junction_copies_first_branch(self):
        c = self._junction()
        result = solve(c, SolverConfig(wire_current=WireCurrentMode.NEIGHBOR))

        assert c["W1"].current == pytest.approx(2.0, abs=1e-3)
        assert c["B1"].current == pytest.approx(2.0, abs=1e-3)
        assert "current-imbalance" in result.codes()

    def test_parallel_wires_form_a_loop(self):
        c = Circuit()
        c.source("B1", "p", "n", emf=6.0)
        c.wire("W1", "p", "a")
        c.wire("W2", "p", "a")
        c.resistor("R1", "a", "n", ohms=2.0)

        result = solve(c)

        assert c["W1"].current + c["W2"].current == pytest.approx(3.0, abs=1e-3)
        assert result.approximate
        assert "wire-loop" in result.codes()
        loop = result.diagnostics[result.codes().index("wire-loop")]
        assert loop.severity is Severity.INFO

    def test_without_merging_wires_carry_no_voltage(self):
        c = _wired_series()
        solve(c, SolverConfig(merge_zero_resistance=False))

        assert not c.node("b").is_solved
        assert c["R1"].current == 0.0
        assert c["B1"].current == 0.0

    def test_shorted_source(self):
        c = Circuit()
        c.source("B1", "p", "n", emf=6.0)
        c.wire("W1", "p", "n")
        c.resistor("R1", "p", "n", ohms=2.0)

        result = solve(c)

        assert "source-shorted" in result.codes()
        assert result.approximate
        assert c["R1"].current == pytest.approx(3.0)
        assert c["W1"].current == pytest.approx(3.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
