"""Immune system with white-cell dynamics and inflammation."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass
class Infection:
    """An infection site."""

    location_id: int
    pathogen_load: float = 0.0
    inflammation: float = 0.0
    time_infected: float = 0.0


@dataclass
class ImmuneState:
    """White-cell counts and inflammatory markers."""

    wbc_count: float = 7000.0  # cells/uL
    neutrophils: float = 4000.0
    lymphocytes: float = 2000.0
    monocytes: float = 500.0
    fever_response: float = 0.0
    cytokine_level: float = 1.0
    sepsis: bool = False


class ImmuneSystem:
    """Fights infections and drives the inflammatory response."""

    def __init__(self) -> None:
        self._state = ImmuneState()
        self._infections: list[Infection] = []

    @property
    def state(self) -> ImmuneState:
        return self._state

    @property
    def infections(self) -> tuple[Infection, ...]:
        return tuple(self._infections)

    @property
    def fever_response(self) -> float:
        return self._state.fever_response

    def add_infection(self, location: int, pathogen_load: float) -> None:
        self._infections.append(Infection(location, pathogen_load))
        self._state.wbc_count += 500.0

    def add_wound(self, location: int) -> None:
        self._state.cytokine_level += 0.2
        self._state.neutrophils += 200.0

    def step(self, dt: float) -> ImmuneState:
        """Advance by dt seconds and return a snapshot of the state."""
        self._fight_infections(dt)
        self._regulate_wbc(dt)
        self._update_fever(dt)
        return dataclasses.replace(self._state)

    def _fight_infections(self, dt: float) -> None:
        kill = self._state.neutrophils * 0.001 * dt
        for infection in self._infections:
            infection.time_infected += dt
            infection.pathogen_load -= kill
            infection.inflammation = min(1.0, infection.pathogen_load / 100.0)
        self._infections = [i for i in self._infections if i.pathogen_load > 0]

    def _regulate_wbc(self, dt: float) -> None:
        s = self._state
        target = 7000.0
        if self._infections:
            target = 12000.0 + len(self._infections) * 2000.0
        s.wbc_count += (target - s.wbc_count) * 0.01 * dt
        s.wbc_count = min(max(s.wbc_count, 1000.0), 50000.0)
        s.neutrophils = s.wbc_count * 0.60
        s.lymphocytes = s.wbc_count * 0.30
        s.monocytes = s.wbc_count * 0.08

    def _update_fever(self, dt: float) -> None:
        s = self._state
        inflammation = sum(i.inflammation for i in self._infections)
        target = min(3.0, inflammation)
        s.fever_response += (target - s.fever_response) * 0.05 * dt
        s.cytokine_level = 1.0 + inflammation * 2.0
        s.sepsis = s.cytokine_level > 10.0 or len(self._infections) > 3