"""Unit tests for power load, PSU sizing and the bill of materials."""

import pytest

from ledlayout.catalog import get_module, get_power_supply
from ledlayout.core.engineering import (
    BOMCategory,
    calculate_power_load,
    generate_bom,
    power_supply_quantity,
    recommend_power_supply,
)


@pytest.fixture
def small_module():
    return get_module("tetra-max-small-24v")


class TestPowerLoad:
    """Tests for calculate_power_load."""

    def test_totals(self, small_module):
        analysis = calculate_power_load(10, small_module)
        assert analysis.total_watts == pytest.approx(4.0)
        assert analysis.total_amps == pytest.approx(4.0 / 24)
        assert analysis.modules_per_circuit == 240

    def test_zero_modules(self, small_module):
        analysis = calculate_power_load(0, small_module)
        assert analysis.total_watts == 0
        assert analysis.total_amps == 0

    def test_to_dict(self, small_module):
        data = calculate_power_load(10, small_module).to_dict()
        assert set(data) == {"total_watts", "total_amps", "modules_per_circuit"}


class TestPowerSupply:
    """Tests for PSU recommendation and unit count."""

    def test_smallest_supply_with_headroom(self):
        assert recommend_power_supply(4).id == "geps-24-20"

    def test_headroom_pushes_to_next_size(self):
        # 17 W needs 20.4 W of capacity
        assert recommend_power_supply(17).id == "geps-24-60"

    def test_no_single_supply(self):
        assert recommend_power_supply(300) is None

    def test_custom_catalog(self):
        catalog = [get_power_supply("geps-24-300")]
        assert recommend_power_supply(4, catalog).id == "geps-24-300"

    def test_quantity(self):
        psu = get_power_supply("geps-24-60")
        assert power_supply_quantity(100, psu) == 3
        assert power_supply_quantity(40, psu) == 1

    def test_quantity_at_least_one(self):
        assert power_supply_quantity(0, get_power_supply("geps-24-20")) == 1


class TestBillOfMaterials:
    """Tests for generate_bom."""

    def test_modules_and_supply(self, small_module):
        psu = get_power_supply("geps-24-20")
        items = generate_bom(small_module, 10, psu)
        assert len(items) == 2
        modules, power = items
        assert modules.sku == "tetra-max-small-24v"
        assert modules.quantity == 10
        assert modules.category == BOMCategory.LIGHTING
        assert power.sku == "geps-24-20"
        assert power.quantity == 1
        assert power.category == BOMCategory.POWER

    def test_supply_count_scales_with_load(self, small_module):
        psu = get_power_supply("geps-24-20")
        # 100 x 0.4 W = 40 W over 16 W usable per unit
        items = generate_bom(small_module, 100, psu)
        assert items[1].quantity == 3

    def test_without_supply(self, small_module):
        items = generate_bom(small_module, 5, None)
        assert [item.category for item in items] == [BOMCategory.LIGHTING]

    def test_to_dict(self, small_module):
        data = generate_bom(small_module, 5, None)[0].to_dict()
        assert data == {
            "sku": "tetra-max-small-24v",
            "name": "Tetra MAX 24V Small",
            "quantity": 5,
            "unit": "pcs",
            "category": "Lighting",
        }
