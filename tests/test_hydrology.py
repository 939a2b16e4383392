import pytest

from isolated.hydrology import (
    Aquifer,
    FloodState,
    HydrologyConfig,
    HydrologySystem,
    WaterTable,
)


def test_aquifer_defaults():
    aq = Aquifer()
    assert aq.saturation() == pytest.approx(0.5)
    assert aq.pressure_head() == pytest.approx(50.0)


def test_flood_state_flags():
    zone = FloodState(water_level=0.5, area=20.0)
    assert zone.volume() == pytest.approx(10.0)
    assert zone.is_flooded()
    assert not zone.is_dangerous()
    assert FloodState(water_level=1.5).is_dangerous()
    assert not FloodState(water_level=0.05).is_flooded()


def test_water_table_initialize_and_index():
    table = WaterTable()
    table.initialize(4, 3, 2.5)
    assert len(table.height) == 12
    assert table.base_height == 2.5
    table[2, 1] = 7.0
    assert table.at(2, 1) == 7.0
    assert table.height[2 + 4 * 1] == 7.0


def test_daily_recharge():
    system = HydrologySystem()
    system.add_aquifer(Aquifer())
    before = system.aquifers[0].current_volume
    rate = system.aquifers[0].recharge_rate
    system.step(86400.0)
    assert system.aquifers[0].current_volume == pytest.approx(before + rate)


def test_aquifer_capped_at_capacity():
    system = HydrologySystem()
    system.add_aquifer(Aquifer(volume=1000.0, current_volume=999.0))
    system.step(3600.0, rainfall=100.0)
    assert system.aquifers[0].current_volume == 1000.0


def test_flat_water_table_stays_flat():
    system = HydrologySystem()
    system.initialize_water_table(5, 5, 3.0)
    system.step(1.0)
    assert all(h == pytest.approx(3.0) for h in system.water_table.height)


def test_water_table_spike_diffuses_conserving_volume():
    system = HydrologySystem()
    system.initialize_water_table(5, 5, 0.0)
    system.water_table[2, 2] = 10.0
    total_before = sum(system.water_table.height)
    system.step(0.5)
    table = system.water_table
    assert table.at(2, 2) < 10.0
    for x, y in ((1, 2), (3, 2), (2, 1), (2, 3)):
        assert table.at(x, y) > 0.0
    assert sum(table.height) == pytest.approx(total_before)
    assert table.at(0, 0) == 0.0


def test_breach_floods_then_drains():
    system = HydrologySystem()
    system.add_aquifer(Aquifer(permeability=1e-6))
    system.add_flood_zone("tunnel", 10.0)
    system.breach_aquifer(0, 2.0)
    zone = system.get_flood_zone("tunnel")
    assert zone.inflow_rate > 0.0
    system.step(1.0)
    assert zone.inflow_rate == 0.0
    level = zone.water_level
    assert level > 0.0
    system.step(1.0)
    assert 0.0 < zone.water_level < level


def test_breach_unknown_aquifer_is_ignored():
    system = HydrologySystem()
    system.add_flood_zone("tunnel", 10.0)
    system.breach_aquifer(3, 2.0)
    assert system.get_flood_zone("tunnel").inflow_rate == 0.0


def test_pumping_accumulates_and_keeps_level_at_zero():
    system = HydrologySystem()
    system.add_flood_zone("shaft", 50.0)
    system.pump_water("shaft", 0.5)
    system.pump_water("shaft", 0.25)
    system.pump_water("missing", 1.0)
    zone = system.get_flood_zone("shaft")
    assert zone.outflow_rate == pytest.approx(0.75)
    system.step(10.0)
    assert zone.water_level == 0.0
    assert zone.outflow_rate == pytest.approx(0.75)


def test_get_missing_flood_zone():
    assert HydrologySystem().get_flood_zone("nowhere") is None


def test_erosion_scales_with_velocity_and_hardness():
    system = HydrologySystem(HydrologyConfig(erosion_rate=2e-6))
    base = system.calculate_erosion(1.0, 1.0)
    assert base == pytest.approx(2e-6)
    assert system.calculate_erosion(2.0, 1.0) == pytest.approx(4 * base)
    assert system.calculate_erosion(1.0, 4.0) == pytest.approx(base / 4)