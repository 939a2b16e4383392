import pytest

from isolated.geology_dynamics import (
    FaultLine,
    GeologyDynamicsConfig,
    GeologyDynamicsSystem,
    SeismicEvent,
)


def _system(n=5):
    system = GeologyDynamicsSystem()
    system.initialize(n, n, n)
    return system


def test_intensity_at_epicentre_is_magnitude():
    event = SeismicEvent(1.0, 2.0, 3.0, 6.5, 3.0, 0.0)
    assert event.intensity_at(1.0, 2.0, 3.0) == pytest.approx(6.5)


def test_intensity_decays_with_distance():
    event = SeismicEvent(0.0, 0.0, 0.0, 5.0, 0.0, 0.0)
    assert event.intensity_at(500.0, 0.0, 0.0) < event.intensity_at(50.0, 0.0, 0.0)


def test_fault_distance_on_and_beside_trace():
    fault = FaultLine(0.0, 0.0, 10.0, 0.0)
    assert fault.distance_to(4.0, 0.0) == pytest.approx(0.0)
    assert fault.distance_to(5.0, 3.0) == pytest.approx(3.0)


def test_fault_distance_beyond_end_uses_endpoint():
    fault = FaultLine(0.0, 0.0, 10.0, 0.0)
    assert fault.distance_to(13.0, 4.0) == pytest.approx(5.0)


def test_at_out_of_range_raises():
    system = _system(3)
    with pytest.raises(IndexError):
        system.at(3, 0, 0)
    with pytest.raises(IndexError):
        system.at(0, -1, 0)


def test_excavate_marks_void_and_loads_neighbours():
    system = _system(3)
    system.excavate(1, 1, 1)
    centre = system.at(1, 1, 1)
    assert centre.is_void and centre.integrity == 0.0
    assert system.at(0, 0, 0).load == pytest.approx(0.1)
    assert system.at(2, 1, 1).load == pytest.approx(0.1)
    assert centre.load == 0.0


def test_excavate_corner_stays_in_bounds():
    system = _system(3)
    system.excavate(0, 0, 0)
    assert system.at(1, 1, 1).load == pytest.approx(0.1)
    assert system.at(2, 2, 2).load == 0.0


def test_excavated_cell_collapses_on_step():
    system = _system(3)
    system.excavate(1, 1, 1)
    system.step(1.0)
    assert (1, 1, 1) in system.get_collapsed_cells()
    assert system.at(1, 1, 0).load > 0.1


def test_no_collapse_in_untouched_grid():
    system = _system(3)
    system.step(1.0)
    assert system.get_collapsed_cells() == []


def test_add_support_increases_support():
    system = _system(2)
    system.add_support(1, 1, 1, 2.0)
    assert system.at(1, 1, 1).support == pytest.approx(3.0)


def test_trigger_earthquake_records_event_and_damages():
    system = _system(4)
    system.trigger_earthquake(0.0, 0.0, 2.0, 5.0)
    events = system.recent_events
    assert len(events) == 1
    assert events[0].magnitude == 5.0
    assert events[0].depth == 2.0
    assert system.at(0, 0, 2).integrity < 1.0
    assert system.at(0, 0, 2).load > 0.0


def test_weak_earthquake_far_away_does_no_damage():
    system = _system(3)
    system.trigger_earthquake(10000.0, 0.0, 0.0, 1.0)
    assert all(system.at(x, 0, 0).integrity == 1.0 for x in range(3))


def test_fault_stress_scales_with_time():
    one = _system(2)
    two = _system(2)
    one.add_fault_line(FaultLine(0.0, 0.0, 1.0, 1.0))
    two.add_fault_line(FaultLine(0.0, 0.0, 1.0, 1.0))
    one.step(1000.0)
    two.step(2000.0)
    assert two.faults[0].stress_accumulation == pytest.approx(
        2 * one.faults[0].stress_accumulation
    )


def test_overstressed_fault_ruptures():
    system = _system(2)
    system.add_fault_line(FaultLine(0.0, 0.0, 2.0, 2.0, stress_accumulation=2000.0))
    system.step(1.0)
    events = system.recent_events
    assert len(events) == 1
    assert events[0].magnitude == pytest.approx(8.0)
    assert events[0].x == pytest.approx(1.0)
    assert system.faults[0].stress_accumulation == 0.0


def test_added_fault_is_copied():
    system = _system(2)
    fault = FaultLine(0.0, 0.0, 1.0, 0.0)
    system.add_fault_line(fault)
    system.step(1000.0)
    assert fault.stress_accumulation == 0.0
    assert system.faults[0].stress_accumulation > 0.0


def test_collapse_threshold_config():
    system = GeologyDynamicsSystem(GeologyDynamicsConfig(collapse_threshold=0.9))
    system.initialize(2, 2, 2)
    system.at(1, 1, 1).integrity = 0.8
    system.step(1.0)
    assert system.get_collapsed_cells() == [(1, 1, 1)]


def test_initialize_keeps_existing_cells():
    system = _system(2)
    system.at(0, 0, 0).support = 4.0
    system.initialize(3, 3, 3)
    assert system.shape == (3, 3, 3)
    assert system.at(0, 0, 0).support == 4.0
    assert system.at(2, 2, 2).support == 1.0