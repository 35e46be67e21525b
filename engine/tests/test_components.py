"""
Tests for component descriptors and engineering notation.

Validates:
1. Descriptor parsing from UI dicts (nodeA/nodeB) and snake_case
2. Defaults (V_AC frequency) and rejection of malformed descriptors
3. Round trip back to the external descriptor shape
4. Engineering notation formatting
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from engine.components import (
    Component,
    ComponentType,
    DEFAULT_AC_FREQUENCY,
    engineering_notation,
)


class TestComponentFromDict:
    """Test descriptor parsing."""

    def test_resistor_descriptor(self):
        comp = Component.from_dict({'id': 'R1', 'type': 'R', 'nodeA': 'Top_1', 'nodeB': 'T-', 'value': 1000})
        assert comp.id == 'R1'
        assert comp.type == ComponentType.RESISTOR
        assert comp.node_a == 'Top_1'
        assert comp.node_b == 'T-'
        assert comp.value == pytest.approx(1000.0)
        assert comp.frequency is None

    def test_snake_case_nodes(self):
        comp = Component.from_dict({'id': 'C1', 'type': 'C', 'node_a': 'a', 'node_b': 'b', 'value': 1e-6})
        assert (comp.node_a, comp.node_b) == ('a', 'b')

    def test_ac_source_default_frequency(self):
        """V_AC without a frequency defaults to 60 Hz."""
        comp = Component.from_dict({'id': 'V1', 'type': 'V_AC', 'nodeA': 'a', 'nodeB': 'gnd', 'value': 10})
        assert comp.frequency == DEFAULT_AC_FREQUENCY == 60.0

    def test_ac_source_explicit_frequency(self):
        comp = Component.from_dict({'id': 'V1', 'type': 'V_AC', 'nodeA': 'a', 'nodeB': 'gnd', 'value': 10, 'frequency': 50})
        assert comp.frequency == 50.0

    def test_source_flags(self):
        dc = Component('V1', ComponentType.DC_SOURCE, 'a', 'gnd', 5.0)
        ac = Component('V2', ComponentType.AC_SOURCE, 'a', 'gnd', 5.0)
        r = Component('R1', ComponentType.RESISTOR, 'a', 'gnd', 5.0)
        assert dc.is_source and ac.is_source
        assert not r.is_source

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="Unknown component type"):
            Component.from_dict({'id': 'D1', 'type': 'D', 'nodeA': 'a', 'nodeB': 'b', 'value': 1})

    def test_missing_id_raises(self):
        with pytest.raises(ValueError):
            Component.from_dict({'type': 'R', 'nodeA': 'a', 'nodeB': 'b', 'value': 1})

    def test_missing_node_raises(self):
        with pytest.raises(ValueError):
            Component.from_dict({'id': 'R1', 'type': 'R', 'nodeA': 'a', 'value': 1})

    def test_non_numeric_value_raises(self):
        with pytest.raises(ValueError):
            Component.from_dict({'id': 'R1', 'type': 'R', 'nodeA': 'a', 'nodeB': 'b', 'value': 'big'})

    def test_components_are_immutable(self):
        comp = Component('R1', ComponentType.RESISTOR, 'a', 'b', 100.0)
        with pytest.raises(AttributeError):
            comp.value = 200.0

    def test_to_dict_uses_external_names(self):
        data = {'id': 'V1', 'type': 'V_AC', 'nodeA': 'a', 'nodeB': 'gnd', 'value': 10.0, 'frequency': 50.0}
        assert Component.from_dict(data).to_dict() == data


class TestEngineeringNotation:
    """Test engineering notation formatting."""

    def test_kilo(self):
        assert engineering_notation(1000, 'Ω') == '1kΩ'

    def test_fractional_kilo(self):
        assert engineering_notation(4700, 'Ω') == '4.7kΩ'

    def test_milliamps(self):
        assert engineering_notation(0.0125, 'A') == '12.5mA'

    def test_nanoamps(self):
        assert engineering_notation(2.5e-7, 'A') == '250nA'

    def test_micro(self):
        assert engineering_notation(0.0001, 'F') == '100µF'

    def test_no_unit(self):
        assert engineering_notation(1000) == '1k'

    def test_zero(self):
        assert engineering_notation(0, 'A') == '0A'

    def test_negative(self):
        assert engineering_notation(-0.0025, 'A') == '-2.5mA'

    def test_rounding_carries_to_next_prefix(self):
        assert engineering_notation(999.96, 'V') == '1kV'

    def test_non_finite(self):
        assert engineering_notation(float('inf'), 'V') == 'infV'


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
