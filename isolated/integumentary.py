"""Skin: wounds, burns, bleeding, infection and healing."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum


class WoundSeverity(IntEnum):
    """Wound severity classification."""

    NONE = 0
    SUPERFICIAL = 1
    PARTIAL = 2
    FULL_THICKNESS = 3
    CRITICAL = 4


class WoundType(IntEnum):
    """Wound type classification."""

    LACERATION = 0
    PUNCTURE = 1
    ABRASION = 2
    BURN = 3
    PRESSURE = 4


@dataclass
class Wound:
    """An individual wound."""

    location_id: int
    wound_type: WoundType
    severity: WoundSeverity
    area_cm2: float = 1.0
    depth_mm: float = 1.0
    healing_progress: float = 0.0  # 0..1
    infection_risk: float = 0.0
    bleed_rate_ml_min: float = 0.0
    time_since_injury: float = 0.0
    is_bandaged: bool = False


@dataclass
class Burn:
    """A burn covering part of the body surface."""

    location_id: int
    tbsa_percent: float = 0.0  # total body surface area
    degree: int = 1  # 1st, 2nd or 3rd
    healing_progress: float = 0.0
    fluid_loss_ml_hr: float = 0.0


@dataclass
class SkinState:
    """Overall condition of the skin."""

    skin_integrity: float = 1.0  # 0..1
    total_wound_area: float = 0.0
    total_burn_tbsa: float = 0.0
    total_bleed_rate: float = 0.0
    infection_count: int = 0
    healing_rate_modifier: float = 1.0


class IntegumentarySystem:
    """Tracks wounds and burns and heals them over time."""

    def __init__(self) -> None:
        self._state = SkinState()
        self._wounds: list[Wound] = []
        self._burns: list[Burn] = []

    @property
    def state(self) -> SkinState:
        return self._state

    @property
    def wounds(self) -> tuple[Wound, ...]:
        return tuple(self._wounds)

    @property
    def burns(self) -> tuple[Burn, ...]:
        return tuple(self._burns)

    def add_wound(self, wound: Wound) -> None:
        self._wounds.append(dataclasses.replace(wound))
        s = self._state
        s.total_wound_area += wound.area_cm2
        s.skin_integrity = max(0.0, s.skin_integrity - wound.area_cm2 * 0.001)

    def add_burn(self, burn: Burn) -> None:
        self._burns.append(dataclasses.replace(burn))
        s = self._state
        s.total_burn_tbsa += burn.tbsa_percent
        s.skin_integrity = max(0.0, s.skin_integrity - burn.tbsa_percent * 0.01)

    def bandage_wound(self, wound_idx: int) -> None:
        """Bandage a wound; indexes past the end are ignored."""
        if 0 <= wound_idx < len(self._wounds):
            w = self._wounds[wound_idx]
            w.is_bandaged = True
            w.bleed_rate_ml_min *= 0.2
            w.infection_risk *= 0.5

    def debride_wound(self, wound_idx: int) -> None:
        """Clean a wound; indexes past the end are ignored."""
        if 0 <= wound_idx < len(self._wounds):
            w = self._wounds[wound_idx]
            w.infection_risk *= 0.5
            w.healing_progress = min(1.0, w.healing_progress + 0.1)

    def step(
        self, dt: float, blood_flow: float = 1.0, nutrition: float = 1.0
    ) -> SkinState:
        """Advance by dt seconds and return a snapshot of the state."""
        self._heal_wounds(dt, blood_flow, nutrition)
        self._heal_burns(dt)
        self._update_bleeding()
        self._check_infections(dt)

        s = self._state
        integrity = 1.0 - (s.total_wound_area * 0.001 + s.total_burn_tbsa * 0.01)
        s.skin_integrity = min(max(integrity, 0.0), 1.0)
        return dataclasses.replace(s)

    def _heal_wounds(self, dt: float, blood_flow: float, nutrition: float) -> None:
        base_rate = 0.001 * self._state.healing_rate_modifier * blood_flow * nutrition
        remaining: list[Wound] = []
        for w in self._wounds:
            w.time_since_injury += dt
            rate = base_rate
            if w.is_bandaged:
                rate *= 1.5
            if w.infection_risk > 0.5:
                rate *= 0.3
            w.healing_progress += rate * dt
            w.bleed_rate_ml_min *= 1.0 - 0.1 * dt
            if w.healing_progress >= 1.0:
                self._state.total_wound_area -= w.area_cm2
            else:
                remaining.append(w)
        self._wounds = remaining

    def _heal_burns(self, dt: float) -> None:
        remaining: list[Burn] = []
        for b in self._burns:
            rate = {1: 0.01, 2: 0.003}.get(b.degree, 0.001)
            b.healing_progress += rate * dt
            b.fluid_loss_ml_hr = (
                b.tbsa_percent
                * (1.0 - b.healing_progress)
                * (10.0 if b.degree == 3 else 5.0)
            )
            if b.healing_progress >= 1.0:
                self._state.total_burn_tbsa -= b.tbsa_percent
            else:
                remaining.append(b)
        self._burns = remaining

    def _update_bleeding(self) -> None:
        self._state.total_bleed_rate = sum(w.bleed_rate_ml_min for w in self._wounds)

    def _check_infections(self, dt: float) -> None:
        count = 0
        for w in self._wounds:
            if not w.is_bandaged and w.time_since_injury > 3600.0:
                w.infection_risk = min(1.0, w.infection_risk + 0.001 * dt)
            if w.infection_risk > 0.7:
                count += 1
        self._state.infection_count = count