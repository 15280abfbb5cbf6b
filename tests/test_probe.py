"""
Test: multimeter readings on solved circuits.

Circuit (series):
    Battery 6 V: n1 -> R1 (3 Ω) -> n2 -> R2 (3 Ω) -> n3
"""
import math
import pytest

from circuitcore import Circuit, Multimeter, solve
from circuitcore.examples import reference_circuits as ref


@pytest.fixture
def solved_series():
    circuit = ref.series()
    solve(circuit)
    return circuit


def test_measure_voltage_is_signed(solved_series):
    meter = Multimeter()
    n1, n2, n3 = (solved_series.node(name) for name in ("n1", "n2", "n3"))

    assert meter.measure_voltage(n1, n3) == pytest.approx(6.0)
    assert meter.measure_voltage(n3, n1) == pytest.approx(-6.0)
    assert meter.measure_voltage(n2, n3) == pytest.approx(3.0, abs=1e-3)
    assert meter.log.entries == []


def test_measure_current(solved_series):
    meter = Multimeter()
    assert meter.measure_current(solved_series["R2"]) == pytest.approx(1.0, abs=1e-3)


def test_unsolved_probe_reads_zero():
    received = []
    c = Circuit()
    c.source("B1", "p", "n", emf=6.0)
    c.resistor("R1", "p", "n", ohms=3.0)
    c.resistor("R9", "x", "y", ohms=1.0)
    solve(c)

    meter = Multimeter(sink=received.append)
    volts = meter.measure_voltage(c.node("x"), c.node("p"))

    assert volts == 0.0
    assert [d.code for d in received] == ["probe-unsolved"]
    assert meter.log.codes() == ["probe-unsolved"]


def test_reading_format(solved_series):
    reading = Multimeter().measure(solved_series["R1"])

    assert reading.name == "R1"
    assert reading.power == pytest.approx(3.0, abs=1e-2)
    assert str(reading) == "[Multimeter] R1: 3.000V, 1.000A"


def test_measure_across_other_nodes(solved_series):
    meter = Multimeter()
    r1 = solved_series["R1"]
    reading = meter.measure(r1, solved_series.node("n1"), solved_series.node("n3"))
    assert reading.voltage == pytest.approx(6.0)
    assert reading.current == pytest.approx(1.0, abs=1e-3)


def test_report(solved_series):
    meter = Multimeter()
    text = meter.report([
        solved_series["R1"],
        (solved_series["R2"], solved_series.node("n2"), solved_series.node("n3")),
    ])
    assert text.splitlines() == [
        "[Multimeter] R1: 3.000V, 1.000A",
        "[Multimeter] R2: 3.000V, 1.000A",
    ]


def test_totals(solved_series):
    totals = Multimeter().totals(solved_series)

    assert totals.voltage == 6.0
    assert totals.current == pytest.approx(1.0, abs=1e-3)
    assert totals.power == pytest.approx(6.0, abs=1e-2)
    assert totals.resistance == pytest.approx(6.0, abs=1e-2)


def test_totals_without_current():
    """An open load draws nothing: infinite equivalent resistance."""
    c = Circuit()
    c.source("B1", "p", "n", emf=3.0)
    c.switch("S1", "p", "n", closed=False)
    solve(c)
    meter = Multimeter()

    totals = meter.totals(c)
    assert totals.voltage == 3.0
    assert totals.current == 0.0
    assert math.isinf(totals.resistance)

    empty = meter.totals([])
    assert empty.voltage == 0.0
    assert math.isinf(empty.resistance)


def test_totals_with_reversed_source():
    """A negative EMF still gives a positive equivalent resistance and power."""
    c = Circuit()
    c.source("B1", "p", "n", emf=-6.0)
    c.resistor("R1", "p", "n", ohms=3.0)
    solve(c)

    totals = Multimeter().totals(c)

    assert totals.voltage == -6.0
    assert totals.current == pytest.approx(2.0)
    assert totals.power == pytest.approx(12.0)
    assert totals.resistance == pytest.approx(3.0)


def test_retained_diagnostics_are_capped():
    """A long-lived meter polled on an unsolved node keeps a bounded history."""
    received = []
    c = Circuit()
    c.source("B1", "p", "n", emf=6.0)
    c.resistor("R1", "p", "n", ohms=3.0)
    c.resistor("R9", "x", "y", ohms=1.0)
    solve(c)

    meter = Multimeter(sink=received.append, history=10)
    for _ in range(250):
        meter.measure_voltage(c.node("x"), c.node("y"))

    assert len(meter.log.entries) == 10
    assert len(received) == 250, "the sink sees every reading"
    assert len(Multimeter().log.entries) == 0


def test_probe_does_not_modify_graph(solved_series):
    before = [(comp.current, comp.voltage_drop) for comp in solved_series]
    meter = Multimeter()
    meter.report(solved_series)
    meter.totals(solved_series)
    assert [(comp.current, comp.voltage_drop) for comp in solved_series] == before


def test_lamp_readout():
    c = Circuit()
    c.source("B1", "p", "n", emf=12.0)
    c.resistor("R1", "p", "m", ohms=4.0)
    lamp = c.lamp("L1", "m", "n", ohms=8.0, rated_power=16.0)

    assert not lamp.is_lit
    assert lamp.brightness == 0.0
    solve(c)

    assert lamp.is_lit
    assert lamp.power == pytest.approx(8.0, abs=1e-2)
    assert lamp.brightness == pytest.approx(0.5, abs=1e-3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
