import numpy as np
import pytest

from isolated.heat_engine import ROOM_TEMP_K, Phase, ThermalConfig, ThermalEngine
from isolated.materials import MATERIALS


def make_engine(**kwargs):
    params = dict(nx=7, ny=7, nz=1, dx=1.0)
    params.update(kwargs)
    return ThermalEngine(ThermalConfig(**params))


def test_phase_values():
    assert [Phase(v) for v in range(5)] == list(Phase)
    assert Phase(4) is Phase.GAS
    assert Phase(0) is Phase.SOLID
    with pytest.raises(ValueError):
        Phase(5)


def test_invalid_config():
    with pytest.raises(ValueError):
        ThermalConfig(nx=0)
    with pytest.raises(ValueError):
        ThermalConfig(dx=0.0)


def test_initial_field_is_room_temperature():
    engine = make_engine()
    assert engine.temperature_field.shape == (49,)
    assert np.all(engine.temperature_field == ROOM_TEMP_K)


def test_set_get_roundtrip():
    engine = make_engine(nz=3)
    engine.set_temperature(2, 5, 1, 412.5)
    assert engine.get_temperature(2, 5, 1) == 412.5
    assert engine.get_temperature(2, 5, 0) == ROOM_TEMP_K


def test_flat_field_ordering():
    engine = make_engine(nz=2)
    engine.set_temperature(3, 2, 1, 350.0)
    assert engine.temperature_field[3 + 7 * (2 + 7 * 1)] == 350.0


def test_out_of_range_raises():
    engine = make_engine()
    with pytest.raises(IndexError):
        engine.get_temperature(7, 0, 0)
    with pytest.raises(IndexError):
        engine.set_temperature(0, -1, 0, 300.0)


def test_uniform_field_is_stable():
    engine = make_engine()
    engine.step(1.0)
    assert np.allclose(engine.temperature_field, ROOM_TEMP_K)


def test_conduction_spreads_and_conserves():
    engine = make_engine(enable_radiation=False)
    engine.set_temperature(3, 3, 0, 400.0)
    before = engine.temperature_field.sum()
    engine.step(1.0)
    assert engine.get_temperature(3, 3, 0) < 400.0
    assert engine.get_temperature(4, 3, 0) > ROOM_TEMP_K
    assert engine.get_temperature(3, 2, 0) > ROOM_TEMP_K
    assert engine.temperature_field.sum() == pytest.approx(before, abs=1e-9)


def test_conduction_leaves_boundary_untouched():
    engine = make_engine(enable_radiation=False)
    engine.set_temperature(1, 1, 0, 450.0)
    engine.step(1.0)
    assert engine.get_temperature(0, 1, 0) == ROOM_TEMP_K
    assert engine.get_temperature(1, 0, 0) == ROOM_TEMP_K


def test_inject_heat_2d():
    engine = make_engine()
    air = MATERIALS["air"]
    engine.inject_heat(2, 2, 0, air.density * air.specific_heat * 10.0)
    assert engine.get_temperature(2, 2, 0) == pytest.approx(ROOM_TEMP_K + 10.0)


def test_inject_heat_uses_cell_material():
    engine = make_engine(nz=3, dx=2.0)
    engine.set_material(1, 1, 1, "water")
    water = MATERIALS["water"]
    joules = water.density * 8.0 * water.specific_heat * 4.0
    engine.inject_heat(1, 1, 1, joules)
    assert engine.get_temperature(1, 1, 1) == pytest.approx(ROOM_TEMP_K + 4.0)


def test_unknown_material_keeps_properties():
    engine = make_engine()
    engine.set_material(2, 2, 0, "unobtainium")
    air = MATERIALS["air"]
    engine.inject_heat(2, 2, 0, air.density * air.specific_heat * 3.0)
    assert engine.get_temperature(2, 2, 0) == pytest.approx(ROOM_TEMP_K + 3.0)


def test_heat_source_raises_temperature():
    engine = make_engine(enable_radiation=False)
    air = MATERIALS["air"]
    engine.add_heat_source(3, 3, 0, air.density * air.specific_heat * 2.0)
    engine.step(1.0)
    assert engine.get_temperature(3, 3, 0) == pytest.approx(ROOM_TEMP_K + 2.0)


def test_equipment_registers_and_heats():
    engine = make_engine(enable_radiation=False)
    engine.add_equipment("pump", 0, 0, 0, 500.0)
    engine.register_entity_heat("crew", 6, 6, 0, 100.0)
    assert engine.equipment_heat == {(0, 0, 0): 500.0}
    engine.step(1.0)
    assert engine.get_temperature(0, 0, 0) > ROOM_TEMP_K
    assert engine.get_temperature(6, 6, 0) > ROOM_TEMP_K


def test_radioactive_ore_decay_heat():
    engine = make_engine(enable_radiation=False)
    air = MATERIALS["air"]
    engine.set_radioactive_ore(0, 6, 0, air.density * air.specific_heat * 3.0)
    engine.step(1.0)
    assert engine.get_temperature(0, 6, 0) == pytest.approx(ROOM_TEMP_K + 3.0)


def test_radiation_cools_hot_emitter():
    hot = make_engine()
    hot.set_material(0, 0, 0, "granite")
    hot.set_temperature(0, 0, 0, 1000.0)
    hot.step(1.0)
    assert hot.get_temperature(0, 0, 0) < 1000.0

    still = make_engine(enable_radiation=False)
    still.set_material(0, 0, 0, "granite")
    still.set_temperature(0, 0, 0, 1000.0)
    still.step(1.0)
    assert still.get_temperature(0, 0, 0) == 1000.0


def test_air_does_not_radiate():
    engine = make_engine()
    engine.set_temperature(0, 0, 0, 1000.0)
    engine.step(1.0)
    assert engine.get_temperature(0, 0, 0) == 1000.0


def test_advection_carries_heat_downstream():
    engine = make_engine(enable_radiation=False)
    engine.set_temperature(1, 3, 0, ROOM_TEMP_K + 10.0)
    engine.set_fluid_velocity(2, 3, 0, 1.0, 0.0)
    engine.step(0.1)
    assert engine.get_temperature(2, 3, 0) > ROOM_TEMP_K + 0.9
    assert engine.get_temperature(2, 3, 0) < ROOM_TEMP_K + 1.1


def test_gpu_mode_leaves_field():
    engine = make_engine(use_gpu=True)
    engine.add_heat_source(3, 3, 0, 1e6)
    engine.set_temperature(3, 3, 0, 400.0)
    engine.step(1.0)
    assert engine.get_temperature(3, 3, 0) == 400.0


def test_3d_conduction_along_z():
    engine = make_engine(nz=3, enable_radiation=False)
    engine.set_temperature(3, 3, 1, 400.0)
    engine.step(1.0)
    assert engine.get_temperature(3, 3, 0) == ROOM_TEMP_K  # z boundary layer
    assert engine.get_temperature(3, 3, 1) < 400.0