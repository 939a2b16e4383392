"""Underground hydrology: aquifers, water table, flooding and erosion."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Aquifer:
    """A water-bearing rock body."""

    volume: float = 1e6  # m^3 capacity
    current_volume: float = 5e5  # m^3
    recharge_rate: float = 100.0  # m^3/day
    porosity: float = 0.3
    permeability: float = 1e-12  # m^2

    x: int = 0
    y: int = 0
    z: int = 0
    extent_x: int = 50
    extent_y: int = 50
    extent_z: int = 10

    def saturation(self) -> float:
        return self.current_volume / self.volume

    def pressure_head(self) -> float:
        """Metres of hydraulic head."""
        return self.saturation() * self.extent_z * 10.0


@dataclass
class WaterTable:
    """Water table height over an nx by ny grid."""

    height: list[float] = field(default_factory=list)
    nx: int = 0
    ny: int = 0
    base_height: float = 0.0

    def initialize(self, width: int, depth: int, initial_height: float) -> None:
        self.nx = width
        self.ny = depth
        n = width * depth
        kept = self.height[:n]
        self.height = kept + [initial_height] * (n - len(kept))
        self.base_height = initial_height

    def at(self, x: int, y: int) -> float:
        return self.height[x + self.nx * y]

    def __getitem__(self, xy: tuple[int, int]) -> float:
        x, y = xy
        return self.height[x + self.nx * y]

    def __setitem__(self, xy: tuple[int, int], value: float) -> None:
        x, y = xy
        self.height[x + self.nx * y] = value


@dataclass
class FloodState:
    """Water standing in a flood zone."""

    water_level: float = 0.0  # m
    inflow_rate: float = 0.0  # m^3/s
    outflow_rate: float = 0.0  # m^3/s
    area: float = 100.0  # m^2

    def volume(self) -> float:
        return self.water_level * self.area

    def is_flooded(self) -> bool:
        return self.water_level > 0.1

    def is_dangerous(self) -> bool:
        return self.water_level > 1.0


@dataclass(frozen=True)
class HydrologyConfig:
    """Physical constants of the hydrology model."""

    water_density: float = 1000.0  # kg/m^3
    gravity: float = 9.81
    drainage_coeff: float = 0.01
    erosion_rate: float = 1e-6


class HydrologySystem:
    """Aquifer recharge, water table diffusion and flood zone levels."""

    def __init__(self, config: HydrologyConfig | None = None) -> None:
        self._config = config if config is not None else HydrologyConfig()
        self._aquifers: list[Aquifer] = []
        self._water_table = WaterTable()
        self._flood_zones: dict[str, FloodState] = {}

    @property
    def config(self) -> HydrologyConfig:
        return self._config

    @property
    def aquifers(self) -> list[Aquifer]:
        return self._aquifers

    @property
    def water_table(self) -> WaterTable:
        return self._water_table

    def add_aquifer(self, aquifer: Aquifer) -> None:
        self._aquifers.append(aquifer)

    def initialize_water_table(self, nx: int, ny: int, height: float) -> None:
        self._water_table.initialize(nx, ny, height)

    def add_flood_zone(self, zone_id: str, area: float) -> None:
        self._flood_zones[zone_id] = FloodState(area=area)

    def get_flood_zone(self, zone_id: str) -> FloodState | None:
        return self._flood_zones.get(zone_id)

    def step(self, dt: float, rainfall: float = 0.0) -> None:
        """Advance by dt seconds with surface rainfall in mm/h."""
        self._update_aquifers(dt, rainfall)
        self._update_water_table(dt)
        self._update_flooding(dt)

    def breach_aquifer(self, aquifer_idx: int, breach_area: float) -> None:
        """Open an aquifer into every flood zone; unknown indexes are ignored."""
        if not 0 <= aquifer_idx < len(self._aquifers):
            return
        flow = self._darcy_flow(self._aquifers[aquifer_idx], breach_area)
        for zone in self._flood_zones.values():
            zone.inflow_rate += flow

    def pump_water(self, zone_id: str, rate_m3s: float) -> None:
        """Add pumping capacity to a zone; unknown zones are ignored."""
        zone = self._flood_zones.get(zone_id)
        if zone is not None:
            zone.outflow_rate += rate_m3s

    def calculate_erosion(self, flow_velocity: float, rock_hardness: float) -> float:
        """Erosion rate, growing with the square of flow velocity."""
        return self._config.erosion_rate * flow_velocity * flow_velocity / rock_hardness

    def _update_aquifers(self, dt: float, rainfall: float) -> None:
        for aq in self._aquifers:
            recharge = rainfall / 1000.0 * aq.extent_x * aq.extent_y
            aq.current_volume += recharge * dt / 3600.0
            aq.current_volume += aq.recharge_rate * dt / 86400.0
            aq.current_volume = min(aq.current_volume, aq.volume)

    def _update_water_table(self, dt: float) -> None:
        table = self._water_table
        new_height = list(table.height)
        diffusivity = 0.1  # m^2/s
        for y in range(1, table.ny - 1):
            for x in range(1, table.nx - 1):
                laplacian = (
                    table.at(x + 1, y)
                    + table.at(x - 1, y)
                    + table.at(x, y + 1)
                    + table.at(x, y - 1)
                    - 4.0 * table.at(x, y)
                )
                new_height[x + table.nx * y] += diffusivity * laplacian * dt
        table.height = new_height

    def _update_flooding(self, dt: float) -> None:
        for zone in self._flood_zones.values():
            net_flow = zone.inflow_rate - zone.outflow_rate
            new_volume = max(0.0, zone.volume() + net_flow * dt)
            zone.water_level = new_volume / zone.area
            if zone.water_level > 0:
                drainage = self._config.drainage_coeff * zone.water_level * dt
                zone.water_level = max(0.0, zone.water_level - drainage)
            zone.inflow_rate = 0.0

    def _darcy_flow(self, aq: Aquifer, area: float) -> float:
        c = self._config
        conductivity = aq.permeability * c.water_density * c.gravity / 1e-3
        gradient = aq.pressure_head() / 10.0
        return conductivity * area * gradient