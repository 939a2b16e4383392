"""Muscle energy metabolism and fatigue."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum


class FiberType(Enum):
    """Muscle fibre type."""

    SLOW_TWITCH = 0
    FAST_TWITCH_A = 1
    FAST_TWITCH_B = 2


@dataclass
class MuscleState:
    """Energy stores and fatigue of the muscles."""

    atp_mmol: float = 8.0
    phosphocreatine: float = 25.0  # mmol/kg
    glycogen_mmol: float = 80.0
    fatigue_level: float = 0.0  # 0..1
    lactate_production: float = 0.0  # mmol/min
    force_capacity: float = 1.0  # 0..1
    oxygen_debt: float = 0.0  # mL O2


class MuscularSystem:
    """ATP turnover, lactate production and fatigue under load."""

    def __init__(self) -> None:
        self._state = MuscleState()

    @property
    def state(self) -> MuscleState:
        return self._state

    def compute_force_output(self, activation: float, fatigue: float) -> float:
        return activation * (1.0 - fatigue * 0.7) * self._state.force_capacity

    def compute_lactate_production(self, intensity: float, o2: float) -> float:
        """Lactate produced at the given intensity and oxygen supply."""
        if intensity > 0.6:
            anaerobic = max(0.0, 1.0 - o2)
            return (intensity - 0.6) * 5.0 * (1.0 + anaerobic)
        return 0.0

    def step(
        self, dt: float, intensity: float = 1.0, o2_supply: float = 1.0
    ) -> MuscleState:
        """Advance by dt seconds of work and return a snapshot of the state."""
        s = self._state
        self._consume_atp(intensity * 0.5 * dt, o2_supply)
        self._regenerate_atp(dt, o2_supply)
        self._update_fatigue(dt, intensity)
        s.lactate_production = self.compute_lactate_production(intensity, o2_supply)
        if o2_supply < intensity:
            s.oxygen_debt += (intensity - o2_supply) * 10.0 * dt
        return dataclasses.replace(s)

    def recover(self, dt: float, o2_availability: float) -> None:
        """Rest for dt seconds."""
        s = self._state
        self._regenerate_atp(dt, o2_availability)
        s.fatigue_level = max(0.0, s.fatigue_level - 0.02 * dt)
        s.oxygen_debt = max(0.0, s.oxygen_debt - o2_availability * 10.0 * dt)
        s.lactate_production = max(0.0, s.lactate_production - 0.5 * dt)

    def _consume_atp(self, amount: float, o2: float) -> None:
        s = self._state
        s.atp_mmol -= amount
        if s.atp_mmol < 6.0 and s.phosphocreatine > 0:
            pcr_use = min(s.phosphocreatine, 6.0 - s.atp_mmol)
            s.phosphocreatine -= pcr_use
            s.atp_mmol += pcr_use
        if s.atp_mmol < 5.0 and s.glycogen_mmol > 0:
            glyc_use = min(s.glycogen_mmol * 0.1, 5.0 - s.atp_mmol)
            s.glycogen_mmol -= glyc_use
            s.atp_mmol += glyc_use * 0.5
            s.lactate_production = glyc_use * (1.0 - o2)

    def _regenerate_atp(self, dt: float, o2: float) -> None:
        s = self._state
        s.atp_mmol = min(8.0, s.atp_mmol + 2.0 * o2 * dt)
        if s.atp_mmol > 7.0:
            s.phosphocreatine = min(25.0, s.phosphocreatine + 0.5 * dt)

    def _update_fatigue(self, dt: float, intensity: float) -> None:
        s = self._state
        if intensity > 0.5:
            s.fatigue_level += (intensity - 0.5) * 0.02 * dt
        s.fatigue_level -= 0.01 * dt
        s.fatigue_level = min(max(s.fatigue_level, 0.0), 1.0)
        s.force_capacity = (1.0 - s.fatigue_level * 0.5) * min(1.0, s.atp_mmol / 6.0)