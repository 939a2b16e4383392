import pytest

from isolated.respiration import (
    HemoglobinConfig,
    HemoglobinModel,
    RespiratoryConfig,
    RespiratorySystem,
)


def test_saturation_is_half_at_p50():
    hb = HemoglobinModel()
    assert hb.compute_saturation(26.6) == pytest.approx(0.5)
    assert hb.p50 == pytest.approx(26.6)


def test_saturation_increases_with_po2_and_stays_below_one():
    hb = HemoglobinModel()
    values = [hb.compute_saturation(p) for p in (10.0, 30.0, 60.0, 100.0, 600.0)]
    assert values == sorted(values)
    assert all(0.0 < v < 1.0 for v in values)


def test_bohr_effect_acidosis_lowers_saturation():
    hb = HemoglobinModel()
    assert hb.compute_saturation(40.0, ph=7.2) < hb.compute_saturation(40.0)
    assert hb.compute_saturation(40.0, temp_c=40.0) < hb.compute_saturation(40.0)
    assert hb.compute_saturation(40.0, pco2_mmhg=60.0) < hb.compute_saturation(40.0)


def test_custom_p50():
    hb = HemoglobinModel(HemoglobinConfig(p50_base=30.0))
    assert hb.compute_saturation(30.0) == pytest.approx(0.5)


def test_oxygen_content_linear_in_hemoglobin():
    hb = HemoglobinModel()
    c0 = hb.compute_oxygen_content(100.0, 0.0)
    c10 = hb.compute_oxygen_content(100.0, 10.0)
    c20 = hb.compute_oxygen_content(100.0, 20.0)
    assert c20 - c10 == pytest.approx(c10 - c0)
    assert c0 > 0.0


def test_initial_ventilation():
    resp = RespiratorySystem()
    assert resp.state.minute_ventilation == pytest.approx(6.0)
    assert resp.state.alveolar_ventilation == pytest.approx(4.2)


def test_changing_rate_scales_minute_ventilation():
    resp = RespiratorySystem()
    resp.respiratory_rate = 24.0
    state = resp.step(1.0, 159.0, 0.3)
    assert state.minute_ventilation == pytest.approx(12.0)


def test_tidal_volume_setter():
    resp = RespiratorySystem()
    resp.tidal_volume = 150.0
    state = resp.step(1.0, 159.0, 0.3)
    assert state.alveolar_ventilation == pytest.approx(0.0)
    assert state.paco2 > 40.0


def test_step_keeps_gases_in_range():
    resp = RespiratorySystem()
    for _ in range(200):
        state = resp.step(1.0, 159.0, 0.3, metabolic_rate=5.0)
        assert 20.0 <= state.pao2 <= 150.0
        assert 15.0 <= state.paco2 <= 80.0
        assert 0.0 < state.sao2 < 1.0


def test_higher_metabolism_raises_co2():
    calm, busy = RespiratorySystem(), RespiratorySystem()
    calm_state = calm.step(1.0, 159.0, 0.3)
    busy_state = busy.step(1.0, 159.0, 0.3, metabolic_rate=2.0)
    assert busy_state.vco2 == pytest.approx(2.0 * calm_state.vco2)
    assert busy_state.paco2 > calm_state.paco2


def test_low_fio2_lowers_saturation():
    normal = RespiratorySystem()
    hypoxic = RespiratorySystem(RespiratoryConfig(fio2=0.10))
    for _ in range(30):
        n = normal.step(1.0, 159.0, 0.3)
        h = hypoxic.step(1.0, 76.0, 0.3)
    assert h.sao2 < n.sao2
    assert h.pao2 < n.pao2


def test_config_is_copied():
    config = RespiratoryConfig()
    resp = RespiratorySystem(config)
    resp.respiratory_rate = 30.0
    assert config.respiratory_rate == pytest.approx(12.0)