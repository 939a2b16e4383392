"""Dynamic geology: cave-ins, earthquakes and fault lines."""

from __future__ import annotations

import dataclasses
import itertools
import math
import random
from dataclasses import dataclass
from typing import Sequence

_SECONDS_PER_YEAR = 365.25 * 86400.0


@dataclass
class StructuralCell:
    """Structural condition of one rock cell."""

    integrity: float = 1.0  # 0..1, 0 = collapsed
    load: float = 0.0
    support: float = 1.0
    is_void: bool = False
    collapsed: bool = False


@dataclass
class SeismicEvent:
    """An earthquake with its epicentre."""

    x: float
    y: float
    z: float
    magnitude: float  # Richter
    depth: float  # m below surface
    timestamp: float

    def intensity_at(self, px: float, py: float, pz: float) -> float:
        dist = math.dist((px, py, pz), (self.x, self.y, self.z))
        return self.magnitude / (1.0 + dist / 100.0)


@dataclass
class FaultLine:
    """A fault with its surface trace and accumulated stress."""

    x1: float
    y1: float
    x2: float
    y2: float
    depth: float = 1000.0  # m
    slip_rate: float = 0.01  # m/year
    stress_accumulation: float = 0.0
    last_rupture: float = 0.0

    has_hydrothermal: bool = False
    heat_flux: float = 0.0  # W/m^2

    def distance_to(self, px: float, py: float) -> float:
        """Distance from a point to the fault's surface trace."""
        dx, dy = self.x2 - self.x1, self.y2 - self.y1
        length_sq = dx * dx + dy * dy
        if length_sq == 0.0:
            t = 0.0
        else:
            t = ((px - self.x1) * dx + (py - self.y1) * dy) / length_sq
            t = min(max(t, 0.0), 1.0)
        return math.hypot(px - (self.x1 + t * dx), py - (self.y1 + t * dy))


@dataclass(frozen=True)
class GeologyDynamicsConfig:
    """Thresholds and rates of the geology dynamics model."""

    collapse_threshold: float = 0.3
    stress_propagation: float = 0.1
    seismic_damping: float = 0.9
    tectonic_rate: float = 1e-9


class GeologyDynamicsSystem:
    """Stress, collapse and seismic activity over a 3D rock grid."""

    def __init__(self, config: GeologyDynamicsConfig | None = None) -> None:
        self._config = config if config is not None else GeologyDynamicsConfig()
        self._rng = random.Random(42)
        self._nx = self._ny = self._nz = 0
        self._cells: list[StructuralCell] = []
        self._faults: list[FaultLine] = []
        self._events: list[SeismicEvent] = []
        self._current_time = 0.0

    @property
    def config(self) -> GeologyDynamicsConfig:
        return self._config

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self._nx, self._ny, self._nz)

    @property
    def recent_events(self) -> Sequence[SeismicEvent]:
        return tuple(self._events)

    @property
    def faults(self) -> Sequence[FaultLine]:
        return tuple(self._faults)

    def initialize(self, nx: int, ny: int, nz: int) -> None:
        """Size the grid; cells already present are kept."""
        self._nx, self._ny, self._nz = nx, ny, nz
        n = nx * ny * nz
        kept = self._cells[:n]
        self._cells = kept + [StructuralCell() for _ in range(n - len(kept))]

    def add_fault_line(self, fault: FaultLine) -> None:
        self._faults.append(dataclasses.replace(fault))

    def step(self, dt: float) -> None:
        """Advance by dt seconds."""
        self._accumulate_fault_stress(dt)
        self._check_for_earthquakes()
        self._propagate_stress()
        self._check_collapses()

    def excavate(self, x: int, y: int, z: int) -> None:
        """Hollow out a cell, shifting load onto its neighbours."""
        cell = self.at(x, y, z)
        cell.is_void = True
        cell.integrity = 0.0
        for dx, dy, dz in itertools.product((-1, 0, 1), repeat=3):
            if dx == dy == dz == 0:
                continue
            nx, ny, nz = x + dx, y + dy, z + dz
            if 0 <= nx < self._nx and 0 <= ny < self._ny and 0 <= nz < self._nz:
                self.at(nx, ny, nz).load += 0.1

    def add_support(self, x: int, y: int, z: int, strength: float) -> None:
        self.at(x, y, z).support += strength

    def trigger_earthquake(self, x: float, y: float, z: float, magnitude: float) -> None:
        """Record an earthquake and damage the grid around it."""
        event = SeismicEvent(x, y, z, magnitude, z, self._current_time)
        self._events.append(event)
        self._apply_seismic_damage(event)

    def at(self, x: int, y: int, z: int) -> StructuralCell:
        if not (0 <= x < self._nx and 0 <= y < self._ny and 0 <= z < self._nz):
            raise IndexError(f"cell ({x}, {y}, {z}) is outside the grid")
        return self._cells[x + self._nx * (y + self._ny * z)]

    def get_collapsed_cells(self) -> list[tuple[int, int, int]]:
        return [xyz for xyz, cell in self._iter_cells() if cell.collapsed]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _iter_cells(self):
        for z in range(self._nz):
            for y in range(self._ny):
                for x in range(self._nx):
                    yield (x, y, z), self._cells[x + self._nx * (y + self._ny * z)]

    def _accumulate_fault_stress(self, dt: float) -> None:
        for fault in self._faults:
            fault.stress_accumulation += fault.slip_rate * dt / _SECONDS_PER_YEAR

    def _check_for_earthquakes(self) -> None:
        for fault in self._faults:
            probability = fault.stress_accumulation * 0.001
            if self._rng.random() < probability:
                magnitude = min(3.0 + fault.stress_accumulation * 2.0, 8.0)
                self.trigger_earthquake(
                    (fault.x1 + fault.x2) / 2.0,
                    (fault.y1 + fault.y2) / 2.0,
                    fault.depth / 2.0,
                    magnitude,
                )
                fault.stress_accumulation = 0.0
                fault.last_rupture = self._current_time

    def _apply_seismic_damage(self, event: SeismicEvent) -> None:
        for (x, y, z), cell in self._iter_cells():
            intensity = event.intensity_at(x, y, z)
            if intensity > 0.5:
                cell.integrity -= (intensity - 0.5) * 0.1
                cell.load += intensity * 0.2

    def _propagate_stress(self) -> None:
        rate = self._config.stress_propagation
        for _, cell in self._iter_cells():
            if cell.load > cell.support:
                cell.integrity -= (cell.load - cell.support) * rate
            cell.integrity = min(max(cell.integrity, 0.0), 1.0)
            cell.load *= 0.99

    def _check_collapses(self) -> None:
        threshold = self._config.collapse_threshold
        for (x, y, z), cell in self._iter_cells():
            if not cell.collapsed and cell.integrity < threshold:
                cell.collapsed = True
                cell.is_void = True
                if z > 0:
                    self.at(x, y, z - 1).load += 0.5