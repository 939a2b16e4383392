"""Ventilation mechanics: dead space, V/Q matching and work of breathing."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum

_ATMOSPHERIC_PRESSURE = 760.0  # mmHg
_WATER_VAPOR_PRESSURE = 47.0  # mmHg
_RESPIRATORY_QUOTIENT = 0.8
_IDEAL_VQ = 0.8


class LungZone(IntEnum):
    """West lung zones."""

    ZONE_1 = 1
    ZONE_2 = 2
    ZONE_3 = 3


class VentilationMode(IntEnum):
    """Ventilatory support mode."""

    SPONTANEOUS = 0
    CPAP = 1
    BIPAP = 2
    MECHANICAL = 3
    HIGH_FLOW = 4


@dataclass(frozen=True)
class VentilationConfig:
    """Lung mechanics."""

    functional_residual_capacity: float = 2400.0  # mL
    vital_capacity: float = 4800.0  # mL
    compliance: float = 100.0  # mL/cmH2O
    airway_resistance: float = 2.0  # cmH2O/L/s


@dataclass
class VentilationState:
    """Ventilation, dead space, V/Q, work of breathing and airway pressures."""

    tidal_volume: float = 500.0  # mL
    respiratory_rate: float = 12.0  # breaths/min
    minute_ventilation: float = 6.0  # L/min
    alveolar_ventilation: float = 4.2  # L/min

    anatomic_dead_space: float = 150.0  # mL
    physiologic_dead_space: float = 180.0
    dead_space_fraction: float = 0.30

    vq_ratio_mean: float = 0.8
    shunt_fraction: float = 0.02
    dead_space_ventilation: float = 0.0

    work_of_breathing: float = 0.5  # J/L
    respiratory_muscle_fatigue: float = 0.0
    oxygen_cost_of_breathing: float = 2.0  # mL O2/min

    peep: float = 0.0  # cmH2O
    pip: float = 0.0
    mean_airway_pressure: float = 0.0
    intrinsic_peep: float = 0.0

    aa_gradient: float = 10.0  # mmHg
    pf_ratio: float = 400.0


class VentilationSystem:
    """Ventilation with V/Q matching, respiratory work and ventilatory support."""

    def __init__(self, config: VentilationConfig | None = None) -> None:
        self._config = config if config is not None else VentilationConfig()
        self._state = VentilationState()
        self._mode = VentilationMode.SPONTANEOUS
        self._support_pressure = 0.0

    @property
    def state(self) -> VentilationState:
        return self._state

    @property
    def config(self) -> VentilationConfig:
        return self._config

    @property
    def mode(self) -> VentilationMode:
        return self._mode

    # ------------------------------------------------------------------
    # Gas exchange
    # ------------------------------------------------------------------

    def compute_vq_mismatch(self, cardiac_output: float, alveolar_vent: float) -> float:
        """Relative deviation of V/Q from the ideal 0.8; 10 with no perfusion."""
        if cardiac_output < 0.1:
            return 10.0
        vq = alveolar_vent / cardiac_output
        return abs(vq - _IDEAL_VQ) / _IDEAL_VQ

    def compute_shunt(self, mixed_venous_o2: float, arterial_o2: float) -> float:
        """Shunt fraction from normalised venous and arterial O2 contents."""
        capillary = 1.0
        if abs(capillary - mixed_venous_o2) < 0.01:
            return 0.0
        shunt = (capillary - arterial_o2) / (capillary - mixed_venous_o2)
        return min(max(shunt, 0.0), 1.0)

    def compute_aa_gradient(self, pao2: float, paco2: float, fio2: float) -> float:
        """Alveolar-arterial O2 gradient in mmHg, never negative."""
        alveolar = (
            fio2 * (_ATMOSPHERIC_PRESSURE - _WATER_VAPOR_PRESSURE)
            - paco2 / _RESPIRATORY_QUOTIENT
        )
        return max(0.0, alveolar - pao2)

    # ------------------------------------------------------------------
    # Work of breathing
    # ------------------------------------------------------------------

    def compute_elastic_work(self, tidal_vol: float, compliance: float) -> float:
        litres = tidal_vol / 1000.0
        return 0.5 * litres * litres / (compliance / 1000.0)

    def compute_resistive_work(self, flow: float, resistance: float) -> float:
        inspiratory_time = 1.5
        return resistance * flow * flow * inspiratory_time

    def accumulate_fatigue(self, dt: float, work: float) -> None:
        """Build respiratory muscle fatigue above a sustainable work level."""
        s = self._state
        sustainable = 0.8
        if work > sustainable:
            s.respiratory_muscle_fatigue += (work - sustainable) * 0.01 * dt
        else:
            s.respiratory_muscle_fatigue -= 0.005 * dt
        s.respiratory_muscle_fatigue = min(max(s.respiratory_muscle_fatigue, 0.0), 1.0)

    # ------------------------------------------------------------------
    # Positive pressure
    # ------------------------------------------------------------------

    def apply_ventilation_support(
        self, mode: VentilationMode, pressure: float
    ) -> None:
        s = self._state
        self._mode = VentilationMode(mode)
        self._support_pressure = pressure

        if mode is VentilationMode.CPAP:
            s.peep = pressure
        elif mode is VentilationMode.BIPAP:
            s.peep = pressure * 0.4
            s.pip = pressure
        elif mode is VentilationMode.MECHANICAL:
            s.peep = 5.0
            s.pip = pressure
        elif mode is VentilationMode.HIGH_FLOW:
            s.peep = min(5.0, pressure / 10.0)
        else:
            s.peep = 0.0
            s.pip = 0.0

        s.mean_airway_pressure = s.peep + (s.pip - s.peep) / 3.0

    def compute_peep_effect(self, peep: float) -> float:
        """Shunt reduction brought by PEEP, at most 0.1."""
        return min(0.1, peep * 0.005)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def step(
        self, dt: float, pao2: float, paco2: float, fio2: float = 0.21
    ) -> VentilationState:
        """Advance by dt seconds and return a snapshot of the state."""
        s = self._state
        s.minute_ventilation = s.tidal_volume * s.respiratory_rate / 1000.0

        self._update_dead_space(paco2)
        self._update_vq_matching(5.0)
        self._update_work_of_breathing()
        self.accumulate_fatigue(dt, s.work_of_breathing)

        s.aa_gradient = self.compute_aa_gradient(pao2, paco2, fio2)
        s.pf_ratio = pao2 / fio2

        if s.respiratory_muscle_fatigue > 0.5:
            s.tidal_volume *= 1.0 - s.respiratory_muscle_fatigue * 0.3
            s.respiratory_rate *= 1.0 + s.respiratory_muscle_fatigue * 0.2

        s.intrinsic_peep = (
            (s.respiratory_rate - 25) * 0.2 if s.respiratory_rate > 25 else 0.0
        )
        return dataclasses.replace(s)

    def _update_dead_space(self, paco2: float) -> None:
        s = self._state
        expired_co2 = paco2 * 0.7
        if paco2 > 0:
            s.dead_space_fraction = (paco2 - expired_co2) / paco2
        s.physiologic_dead_space = s.tidal_volume * s.dead_space_fraction
        s.alveolar_ventilation = (
            (s.tidal_volume - s.physiologic_dead_space) * s.respiratory_rate / 1000.0
        )

    def _update_vq_matching(self, cardiac_output: float) -> None:
        s = self._state
        s.vq_ratio_mean = s.alveolar_ventilation / max(0.1, cardiac_output)
        s.shunt_fraction = max(0.0, 0.02 - self.compute_peep_effect(s.peep))

    def _update_work_of_breathing(self) -> None:
        s, c = self._state, self._config
        flow = s.tidal_volume / 2.0 / 1000.0
        elastic = self.compute_elastic_work(s.tidal_volume, c.compliance)
        resistive = self.compute_resistive_work(flow, c.airway_resistance)
        s.work_of_breathing = elastic + resistive
        s.oxygen_cost_of_breathing = s.work_of_breathing * s.respiratory_rate * 0.5

        if self._mode is VentilationMode.MECHANICAL:
            factor = 0.1
        elif self._mode is VentilationMode.BIPAP:
            factor = 0.5
        else:
            factor = 1.0
        s.work_of_breathing *= factor
        s.oxygen_cost_of_breathing *= factor