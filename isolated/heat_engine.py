"""Coupled thermal simulation on a regular 3D grid.

Conduction, upwind advection, volumetric and decay heat sources,
Stefan-Boltzmann radiation and enthalpy-based phase changes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from isolated.materials import MATERIALS

ROOM_TEMP_K = 293.15
STEFAN_BOLTZMANN = 5.670374419e-8  # W/(m^2*K^4)


class Phase(IntEnum):
    """Phase state of a cell."""

    SOLID = 0
    MELTING = 1
    LIQUID = 2
    BOILING = 3
    GAS = 4


@dataclass(frozen=True)
class ThermalConfig:
    """Grid dimensions and simulation options."""

    nx: int = 100
    ny: int = 100
    nz: int = 1
    dx: float = 1.0
    enable_radiation: bool = True
    radiation_threshold: float = 500.0  # K, cells only radiate above this
    use_gpu: bool = False

    def __post_init__(self) -> None:
        if min(self.nx, self.ny, self.nz) < 1:
            raise ValueError("grid dimensions must be at least 1")
        if self.dx <= 0:
            raise ValueError("cell size must be positive")


class ThermalEngine:
    """Thermal field over an nx * ny * nz grid of cells."""

    def __init__(self, config: ThermalConfig | None = None) -> None:
        self._config = config if config is not None else ThermalConfig()
        c = self._config
        shape = (c.nz, c.ny, c.nx)
        air = MATERIALS["air"]

        self._temperature = np.full(shape, ROOM_TEMP_K)
        self._enthalpy = np.zeros(shape)
        self._phase = np.full(shape, int(Phase.GAS), dtype=np.uint8)

        self._material_id = np.zeros(shape, dtype=np.intp)
        self._material_list: list[str] = ["air"]
        self._k = np.full(shape, air.thermal_conductivity)
        self._cp = np.full(shape, air.specific_heat)
        self._rho = np.full(shape, air.density)
        self._emissivity = np.full(shape, air.emissivity)

        self._heat_sources = np.zeros(shape)
        self._decay_heat = np.zeros(shape)
        self._fluid_ux = np.zeros(shape)
        self._fluid_uy = np.zeros(shape)

        self._equipment_heat: dict[tuple[int, int, int], float] = {}

    @property
    def config(self) -> ThermalConfig:
        return self._config

    @property
    def temperature_field(self) -> np.ndarray:
        """Flat view of all temperatures, x varying fastest, then y, then z."""
        return self._temperature.reshape(-1)

    @property
    def equipment_heat(self) -> dict[tuple[int, int, int], float]:
        """Registered equipment output in watts, keyed by (x, y, z)."""
        return dict(self._equipment_heat)

    def _index(self, x: int, y: int, z: int) -> tuple[int, int, int]:
        c = self._config
        if not (0 <= x < c.nx and 0 <= y < c.ny and 0 <= z < c.nz):
            raise IndexError(f"cell ({x}, {y}, {z}) is outside the grid")
        return z, y, x

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def step(self, dt: float) -> None:
        """Advance the field by dt seconds.

        With ``use_gpu`` set the field is owned by an external accelerator
        and is not advanced here.
        """
        if self._config.use_gpu:
            return
        self._step_conduction(dt)
        self._step_advection(dt)
        self._step_sources(dt)
        self._apply_decay_heat(dt)
        if self._config.enable_radiation:
            self._step_radiation(dt)
        self._step_phase_change()

    def _step_conduction(self, dt: float) -> None:
        t = self._temperature
        dx2 = self._config.dx * self._config.dx
        inner = (slice(None), slice(1, -1), slice(1, -1))
        center = t[inner]
        laplacian = (
            t[:, 1:-1, 2:] + t[:, 1:-1, :-2] + t[:, 2:, 1:-1] + t[:, :-2, 1:-1]
            - 4.0 * center
        ) / dx2
        if self._config.nz > 1:
            laplacian[1:-1] += (
                t[2:, 1:-1, 1:-1] + t[:-2, 1:-1, 1:-1] - 2.0 * center[1:-1]
            ) / dx2
        alpha = self._k[inner] / (self._rho[inner] * self._cp[inner])
        t[inner] += alpha * laplacian * dt

    def _step_advection(self, dt: float) -> None:
        t = self._temperature
        dx = self._config.dx
        inner = (slice(None), slice(1, -1), slice(1, -1))
        center = t[inner]
        ux = self._fluid_ux[inner]
        uy = self._fluid_uy[inner]
        dtdx = np.where(
            ux > 0, (center - t[:, 1:-1, :-2]) / dx, (t[:, 1:-1, 2:] - center) / dx
        )
        dtdy = np.where(
            uy > 0, (center - t[:, :-2, 1:-1]) / dx, (t[:, 2:, 1:-1] - center) / dx
        )
        t[inner] += -(ux * dtdx + uy * dtdy) * dt

    def _add_volumetric(self, power: np.ndarray, mask: np.ndarray, dt: float) -> None:
        rho_cp = self._rho * self._cp
        mask = mask & (rho_cp > 0)
        self._temperature[mask] += power[mask] * dt / rho_cp[mask]

    def _step_sources(self, dt: float) -> None:
        self._add_volumetric(self._heat_sources, self._heat_sources != 0.0, dt)

    def _apply_decay_heat(self, dt: float) -> None:
        self._add_volumetric(self._decay_heat, self._decay_heat > 0.0, dt)

    def _step_radiation(self, dt: float) -> None:
        t = self._temperature
        rho_cp = self._rho * self._cp
        mask = (
            (t >= self._config.radiation_threshold)
            & (self._emissivity >= 0.01)
            & (rho_cp > 0)
        )
        q_rad = STEFAN_BOLTZMANN * self._emissivity[mask] * (
            t[mask] ** 4 - ROOM_TEMP_K**4
        )
        t[mask] -= q_rad * dt / (rho_cp[mask] * self._config.dx)

    def _step_phase_change(self) -> None:
        def table(attr: str) -> np.ndarray:
            return np.array(
                [
                    getattr(MATERIALS[name], attr) if name in MATERIALS else 0.0
                    for name in self._material_list
                ]
            )

        ids = self._material_id
        tm = table("melting_point")[ids]
        lf = table("latent_heat_fusion")[ids]
        tb = table("boiling_point")[ids]
        lv = table("latent_heat_vaporization")[ids]

        temp = self._temperature.copy()
        phase = self._phase.copy()
        rho = self._rho
        rho_cp = rho * self._cp

        def transition(point, latent, before, during, after):
            active = (point > 0) & (latent > 0)
            start = active & (phase == before) & (temp >= point)
            self._enthalpy[start] += rho_cp[start] * (temp[start] - point[start])
            self._temperature[start] = point[start]
            self._phase[start] = during
            done = active & (phase == during) & (self._enthalpy >= latent * rho)
            self._enthalpy[done] = 0.0
            self._phase[done] = after

        transition(tm, lf, Phase.SOLID, Phase.MELTING, Phase.LIQUID)
        transition(tb, lv, Phase.LIQUID, Phase.BOILING, Phase.GAS)

    # ------------------------------------------------------------------
    # Setup and access
    # ------------------------------------------------------------------

    def set_material(self, x: int, y: int, z: int, material_name: str) -> None:
        """Assign a material to a cell; unknown names keep the old properties."""
        cell = self._index(x, y, z)
        if material_name not in self._material_list:
            self._material_list.append(material_name)
        self._material_id[cell] = self._material_list.index(material_name)

        props = MATERIALS.get(material_name)
        if props is not None:
            self._k[cell] = props.thermal_conductivity
            self._cp[cell] = props.specific_heat
            self._rho[cell] = props.density
            self._emissivity[cell] = props.emissivity

    def set_temperature(self, x: int, y: int, z: int, temp_k: float) -> None:
        self._temperature[self._index(x, y, z)] = temp_k

    def get_temperature(self, x: int, y: int, z: int) -> float:
        return float(self._temperature[self._index(x, y, z)])

    def add_heat_source(self, x: int, y: int, z: int, watts: float) -> None:
        """Add a constant power source to a cell."""
        volume = self._config.dx**3
        self._heat_sources[self._index(x, y, z)] += watts / volume

    def add_equipment(
        self, equipment_id: str, x: int, y: int, z: int, watts: float
    ) -> None:
        """Add a heat-producing piece of equipment at a cell."""
        self.add_heat_source(x, y, z, watts)
        self._equipment_heat[(x, y, z)] = watts

    def register_entity_heat(
        self, entity_id: str, x: int, y: int, z: int, watts: float
    ) -> None:
        """Add the steady heat output of an entity at a cell."""
        self.add_heat_source(x, y, z, watts)

    def set_radioactive_ore(
        self, x: int, y: int, z: int, watts_per_m3: float
    ) -> None:
        self._decay_heat[self._index(x, y, z)] = watts_per_m3

    def inject_heat(self, x: int, y: int, z: int, joules: float) -> None:
        """Add a one-off pulse of energy to a cell."""
        cell = self._index(x, y, z)
        dx = self._config.dx
        volume = dx * dx if self._config.nz == 1 else dx**3
        heat_capacity = self._rho[cell] * volume * self._cp[cell]
        if heat_capacity > 1e-6:
            self._temperature[cell] += joules / heat_capacity

    def set_fluid_velocity(
        self, x: int, y: int, z: int, ux: float, uy: float
    ) -> None:
        cell = self._index(x, y, z)
        self._fluid_ux[cell] = ux
        self._fluid_uy[cell] = uy