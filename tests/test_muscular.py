import pytest

from isolated.muscular import FiberType, MuscularSystem


def test_fiber_types_distinct():
    members = list(FiberType)
    assert [m.name for m in members] == [
        "SLOW_TWITCH",
        "FAST_TWITCH_A",
        "FAST_TWITCH_B",
    ]
    for member in members:
        assert FiberType(member.value) is member
    assert len({m.value for m in members}) == 3


def test_force_output_at_rest_equals_activation():
    muscle = MuscularSystem()
    assert muscle.compute_force_output(0.8, 0.0) == pytest.approx(0.8)


def test_force_output_drops_with_fatigue():
    muscle = MuscularSystem()
    assert muscle.compute_force_output(1.0, 1.0) < muscle.compute_force_output(1.0, 0.5)


def test_no_lactate_at_low_intensity():
    muscle = MuscularSystem()
    assert muscle.compute_lactate_production(0.5, 0.0) == 0.0
    assert muscle.compute_lactate_production(0.6, 1.0) == 0.0


def test_lactate_grows_with_hypoxia():
    muscle = MuscularSystem()
    aerobic = muscle.compute_lactate_production(0.9, 1.0)
    hypoxic = muscle.compute_lactate_production(0.9, 0.2)
    assert 0.0 < aerobic < hypoxic


def test_atp_never_exceeds_maximum():
    muscle = MuscularSystem()
    state = muscle.step(1.0, intensity=0.1, o2_supply=1.0)
    assert state.atp_mmol == 8.0
    assert state.fatigue_level == 0.0


def test_heavy_work_builds_fatigue_and_oxygen_debt():
    muscle = MuscularSystem()
    for _ in range(10):
        state = muscle.step(1.0, intensity=2.0, o2_supply=1.0)
    assert state.fatigue_level > 0.0
    assert state.oxygen_debt == pytest.approx(100.0)
    assert state.force_capacity < 1.0


def test_fatigue_is_clamped():
    muscle = MuscularSystem()
    for _ in range(100):
        state = muscle.step(10.0, intensity=10.0, o2_supply=1.0)
    assert state.fatigue_level == 1.0


def test_low_oxygen_depletes_stores():
    muscle = MuscularSystem()
    for _ in range(5):
        state = muscle.step(1.0, intensity=4.0, o2_supply=0.0)
    assert state.phosphocreatine < 25.0
    assert state.atp_mmol < 8.0


def test_recover_reduces_fatigue_and_debt():
    muscle = MuscularSystem()
    for _ in range(10):
        muscle.step(1.0, intensity=2.0, o2_supply=1.0)
    fatigue = muscle.state.fatigue_level
    debt = muscle.state.oxygen_debt
    muscle.recover(1.0, 1.0)
    assert muscle.state.fatigue_level < fatigue
    assert muscle.state.oxygen_debt < debt
    muscle.recover(1000.0, 1.0)
    assert muscle.state.fatigue_level == 0.0
    assert muscle.state.oxygen_debt == 0.0
    assert muscle.state.lactate_production == 0.0


def test_step_returns_snapshot():
    muscle = MuscularSystem()
    snapshot = muscle.step(1.0, intensity=2.0, o2_supply=1.0)
    muscle.step(1.0, intensity=2.0, o2_supply=1.0)
    assert snapshot.oxygen_debt < muscle.state.oxygen_debt