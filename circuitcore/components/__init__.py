from .base import (  # noqa: F401
    OPEN_CIRCUIT,
    Component,
    ComponentKind,
    resistance,
    is_open_circuit,
    is_resistive,
    is_zero_resistance,
)
from .passive import Resistor, Lamp, Wire, Switch  # noqa: F401
from .sources import Source  # noqa: F401
