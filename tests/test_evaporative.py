import pytest

from isolated.evaporative import (
    CoolingConfig,
    EvaporationState,
    EvaporativeCooling,
    dew_point,
    relative_humidity,
    saturation_vapor_pressure,
    wet_bulb_temperature,
)


def test_saturation_pressure_at_freezing_is_magnus_constant():
    assert saturation_vapor_pressure(0.0) == pytest.approx(610.78)


def test_saturation_pressure_increases_with_temperature():
    values = [saturation_vapor_pressure(t) for t in (-10, 0, 10, 20, 30, 40)]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_relative_humidity_of_saturated_air_is_one():
    p = saturation_vapor_pressure(25.0)
    assert relative_humidity(p, 25.0) == pytest.approx(1.0)


def test_relative_humidity_is_clamped():
    assert relative_humidity(-100.0, 20.0) == 0.0
    assert relative_humidity(1e9, 20.0) == 1.0
    p = saturation_vapor_pressure(20.0) * 0.4
    assert relative_humidity(p, 20.0) == pytest.approx(0.4)


def test_dew_point_of_saturated_air_equals_temperature():
    assert dew_point(21.0, 1.0) == pytest.approx(21.0)


def test_dew_point_of_dry_air():
    assert dew_point(30.0, 0.0) == -273.15
    assert dew_point(30.0, -0.5) == -273.15


def test_dew_point_below_temperature_for_unsaturated_air():
    assert dew_point(30.0, 0.5) < 30.0


def test_wet_bulb_rises_with_humidity_and_stays_below_dry_bulb():
    values = [wet_bulb_temperature(30.0, rh) for rh in (0.2, 0.5, 0.8)]
    assert values == sorted(values)
    assert all(v < 30.0 for v in values)


def test_calculate_no_evaporation_into_saturated_air_at_same_temperature():
    cooling = EvaporativeCooling()
    state = cooling.calculate(20.0, 20.0, 1.0, 1.0, 2.0)
    assert state == EvaporationState()


def test_calculate_cooling_power_is_rate_times_latent_heat():
    cooling = EvaporativeCooling()
    state = cooling.calculate(35.0, 25.0, 0.4, 2.0, 1.0)
    assert state.evap_rate > 0
    assert state.cooling_power == pytest.approx(state.evap_rate * 2.26e6)
    assert state.humidity_change == state.evap_rate


def test_calculate_scales_with_area_and_air_velocity():
    cooling = EvaporativeCooling()
    base = cooling.calculate(30.0, 25.0, 0.5, 1.0, 0.0)
    double_area = cooling.calculate(30.0, 25.0, 0.5, 2.0, 0.0)
    windy = cooling.calculate(30.0, 25.0, 0.5, 1.0, 4.0)
    assert double_area.evap_rate == pytest.approx(2 * base.evap_rate)
    assert windy.evap_rate > base.evap_rate


def test_custom_latent_heat_is_used():
    cooling = EvaporativeCooling(CoolingConfig(latent_heat=1.0))
    state = cooling.calculate(35.0, 25.0, 0.4, 1.0, 1.0)
    assert state.cooling_power == pytest.approx(state.evap_rate)


def test_human_cooling_zero_without_sweat_or_gradient():
    cooling = EvaporativeCooling()
    assert cooling.human_evaporative_cooling(34.0, 25.0, 0.5, 0.0) == 0.0
    assert cooling.human_evaporative_cooling(30.0, 30.0, 1.0, 1.0) == 0.0
    assert cooling.human_evaporative_cooling(30.0, 40.0, 1.0, 1.0) == 0.0


def test_human_cooling_bounded_by_full_sweat_evaporation():
    cooling = EvaporativeCooling()
    result = cooling.human_evaporative_cooling(34.0, 20.0, 0.3, 1.0)
    assert 0.0 < result < 2.26e6 / 3600.0


def test_heat_index_below_threshold_returns_temperature():
    assert EvaporativeCooling.heat_index(20.0, 0.9) == 20.0


def test_heat_index_grows_with_humidity_when_hot():
    dry = EvaporativeCooling.heat_index(35.0, 0.4)
    humid = EvaporativeCooling.heat_index(35.0, 0.8)
    assert humid > dry
    assert humid > 35.0