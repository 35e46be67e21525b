"""
Component descriptors for the breadboard simulator.

A component is a two-terminal element placed between two electrical
nodes (breadboard rows/rails). Nodes are plain string labels shared by
every component that touches them; the engine never owns them.

Units follow SI throughout:
    R    → Ohms
    C    → Farads
    L    → Henries
    V_DC → Volts
    V_AC → Volts (peak), with frequency in Hz
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

DEFAULT_AC_FREQUENCY = 60.0


class ComponentType(str, Enum):
    RESISTOR = "R"
    CAPACITOR = "C"
    INDUCTOR = "L"
    DC_SOURCE = "V_DC"
    AC_SOURCE = "V_AC"

    @property
    def is_source(self) -> bool:
        return self in (ComponentType.DC_SOURCE, ComponentType.AC_SOURCE)


@dataclass(frozen=True)
class Component:
    """A placed two-terminal element."""
    id: str
    type: ComponentType
    node_a: str
    node_b: str
    value: float
    frequency: Optional[float] = None

    @property
    def is_source(self) -> bool:
        return self.type.is_source

    @classmethod
    def from_dict(cls, data: Dict) -> "Component":
        """
        Build a component from an external descriptor.

        Accepts the UI field names (nodeA/nodeB) as well as snake_case.

        Raises:
            ValueError: missing id, unknown type or non-numeric value.
        """
        comp_id = data.get('id')
        if not comp_id:
            raise ValueError("Component descriptor must have a non-empty 'id'")

        try:
            comp_type = ComponentType(data.get('type'))
        except ValueError:
            valid = [t.value for t in ComponentType]
            raise ValueError(f"Unknown component type '{data.get('type')}'. Must be one of: {valid}")

        node_a = data.get('nodeA', data.get('node_a'))
        node_b = data.get('nodeB', data.get('node_b'))
        if node_a is None or node_b is None:
            raise ValueError(f"Component '{comp_id}' must reference two nodes")

        try:
            value = float(data['value'])
        except (KeyError, TypeError, ValueError):
            raise ValueError(f"Component '{comp_id}' has no numeric 'value'")

        frequency = data.get('frequency')
        if comp_type == ComponentType.AC_SOURCE and frequency is None:
            frequency = DEFAULT_AC_FREQUENCY

        return cls(
            id=str(comp_id),
            type=comp_type,
            node_a=str(node_a),
            node_b=str(node_b),
            value=value,
            frequency=float(frequency) if frequency is not None else None,
        )

    def to_dict(self) -> Dict:
        data = {
            'id': self.id,
            'type': self.type.value,
            'nodeA': self.node_a,
            'nodeB': self.node_b,
            'value': self.value,
        }
        if self.frequency is not None:
            data['frequency'] = self.frequency
        return data


# Exponent (multiple of 3) to SI prefix
_SI_PREFIXES = {
    -15: 'f',
    -12: 'p',
    -9: 'n',
    -6: 'µ',
    -3: 'm',
    0: '',
    3: 'k',
    6: 'M',
    9: 'G',
}


def engineering_notation(value: float, unit: str = '', precision: int = 3) -> str:
    """
    Render a reading with an SI prefix, e.g. for a meter display.

        engineering_notation(1000, 'Ω')      → '1kΩ'
        engineering_notation(0.0125, 'A')    → '12.5mA'
        engineering_notation(-2.5e-7, 'A')   → '-250nA'
    """
    if value == 0:
        return f"0{unit}"
    if not math.isfinite(value):
        return f"{value}{unit}"

    magnitude = abs(value)
    exponent = 3 * math.floor(math.log10(magnitude) / 3)
    exponent = min(max(exponent, -15), 9)
    mantissa = float(f"{magnitude / 10 ** exponent:.{precision}g}")
    # Rounding can carry into the next prefix (999.7 → 1000)
    if mantissa >= 1000 and exponent < 9:
        exponent += 3
        mantissa = float(f"{mantissa / 1000:.{precision}g}")

    sign = '-' if value < 0 else ''
    return f"{sign}{mantissa:g}{_SI_PREFIXES[exponent]}{unit}"
