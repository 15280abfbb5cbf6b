from __future__ import annotations
import math


def series(*ohms: float) -> float:
    """
    Equivalent resistance of resistors in series.

    Any open circuit (math.inf) makes the whole chain open.
    """
    return float(sum(ohms))


def parallel(*ohms: float) -> float:
    """
    Equivalent resistance of resistors in parallel.

    Open branches are ignored; a zero-ohm branch shorts the combination.
    Returns math.inf when every branch is open (or none is given).
    """
    conductance = 0.0
    for r in ohms:
        if math.isinf(r):
            continue
        if r == 0:
            return 0.0
        conductance += 1.0 / r
    return math.inf if conductance == 0 else 1.0 / conductance
