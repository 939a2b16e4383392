"""Procedural world generation: noise, geology layers, caverns and minerals."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def _grad2(hash_value: int, x: float, y: float) -> float:
    h = hash_value & 7
    u = x if h < 4 else y
    v = y if h < 4 else x
    return (-u if h & 1 else u) + (-2.0 * v if h & 2 else 2.0 * v)


def _grad3(hash_value: int, x: float, y: float, z: float) -> float:
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h in (12, 14):
        v = x
    else:
        v = z
    return (-u if h & 1 else u) + (-v if h & 2 else v)


class NoiseGenerator:
    """Seeded Perlin noise with fractal Brownian motion."""

    def __init__(self, seed: int = 42) -> None:
        table = list(range(256))
        random.Random(seed).shuffle(table)
        self._perm: tuple[int, ...] = tuple(table + table)

    def noise2d(self, x: float, y: float) -> float:
        fx, fy = math.floor(x), math.floor(y)
        xi, yi = int(fx) & 255, int(fy) & 255
        x -= fx
        y -= fy
        u, v = _fade(x), _fade(y)
        p = self._perm
        a = p[xi] + yi
        b = p[xi + 1] + yi
        return _lerp(
            _lerp(_grad2(p[a], x, y), _grad2(p[b], x - 1, y), u),
            _lerp(_grad2(p[a + 1], x, y - 1), _grad2(p[b + 1], x - 1, y - 1), u),
            v,
        )

    def noise3d(self, x: float, y: float, z: float) -> float:
        fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
        xi, yi, zi = int(fx) & 255, int(fy) & 255, int(fz) & 255
        x -= fx
        y -= fy
        z -= fz
        u, v, w = _fade(x), _fade(y), _fade(z)
        p = self._perm
        a = p[xi] + yi
        aa = p[a] + zi
        ab = p[a + 1] + zi
        b = p[xi + 1] + yi
        ba = p[b] + zi
        bb = p[b + 1] + zi
        return _lerp(
            _lerp(
                _lerp(_grad3(p[aa], x, y, z), _grad3(p[ba], x - 1, y, z), u),
                _lerp(_grad3(p[ab], x, y - 1, z), _grad3(p[bb], x - 1, y - 1, z), u),
                v,
            ),
            _lerp(
                _lerp(
                    _grad3(p[aa + 1], x, y, z - 1),
                    _grad3(p[ba + 1], x - 1, y, z - 1),
                    u,
                ),
                _lerp(
                    _grad3(p[ab + 1], x, y - 1, z - 1),
                    _grad3(p[bb + 1], x - 1, y - 1, z - 1),
                    u,
                ),
                v,
            ),
            w,
        )

    def fbm2d(
        self,
        x: float,
        y: float,
        octaves: int = 4,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> float:
        """Fractal sum of 2D noise, normalised by total amplitude."""
        value = max_value = 0.0
        amplitude = frequency = 1.0
        for _ in range(octaves):
            value += amplitude * self.noise2d(x * frequency, y * frequency)
            max_value += amplitude
            amplitude *= persistence
            frequency *= lacunarity
        return value / max_value

    def fbm3d(
        self,
        x: float,
        y: float,
        z: float,
        octaves: int = 4,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> float:
        """Fractal sum of 3D noise, normalised by total amplitude."""
        value = max_value = 0.0
        amplitude = frequency = 1.0
        for _ in range(octaves):
            value += amplitude * self.noise3d(
                x * frequency, y * frequency, z * frequency
            )
            max_value += amplitude
            amplitude *= persistence
            frequency *= lacunarity
        return value / max_value


class RockType(IntEnum):
    """Kind of rock filling a geology cell."""

    AIR = 0
    REGOLITH = 1
    BASALT = 2
    GRANITE = 3
    ICE = 4
    ORE_IRON = 5
    ORE_URANIUM = 6
    ORE_WATER_ICE = 7


_ORE_TYPES = (RockType.ORE_IRON, RockType.ORE_URANIUM, RockType.ORE_WATER_ICE)


@dataclass(frozen=True)
class GeologyConfig:
    """Noise scales and ore parameters of the geology generator."""

    base_layer_scale: float = 0.02
    ore_scale: float = 0.1
    ore_threshold: float = 0.7
    ore_frequency: int = 5  # percent chance per solid cell


class GeologyGenerator:
    """Layered rock volume with scattered ore pockets."""

    def __init__(
        self,
        width: int,
        height: int,
        depth: int,
        config: GeologyConfig | None = None,
        seed: int = 42,
    ) -> None:
        self.width = width
        self.height = height
        self.depth = depth
        self._config = config if config is not None else GeologyConfig()
        self._noise = NoiseGenerator(seed)
        self._rng = random.Random(seed)
        self._grid: list[RockType] = [RockType.AIR] * (width * height * depth)

    @property
    def config(self) -> GeologyConfig:
        return self._config

    @property
    def grid(self) -> Sequence[RockType]:
        return tuple(self._grid)

    def _idx(self, x: int, y: int, z: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height and 0 <= z < self.depth):
            raise IndexError(f"cell ({x}, {y}, {z}) is outside the volume")
        return x + self.width * (y + self.height * z)

    def generate(self) -> None:
        """Fill the volume with rock by depth and noise."""
        c = self._config
        scale = c.base_layer_scale
        for z in range(self.depth):
            depth_factor = z / self.depth
            for y in range(self.height):
                for x in range(self.width):
                    n = self._noise.fbm3d(x * scale, y * scale, z * scale, 4)
                    rock = RockType.AIR
                    if n + depth_factor > 0.3:
                        if depth_factor < 0.2:
                            rock = RockType.REGOLITH
                        elif depth_factor < 0.6:
                            rock = RockType.BASALT
                        else:
                            rock = RockType.GRANITE

                        if self._rng.randint(0, 99) < c.ore_frequency:
                            ore_n = self._noise.noise3d(
                                x * c.ore_scale, y * c.ore_scale, z * c.ore_scale
                            )
                            if ore_n > c.ore_threshold:
                                rock = _ORE_TYPES[self._rng.randint(0, 99) % 3]
                    self._grid[x + self.width * (y + self.height * z)] = rock

    def get(self, x: int, y: int, z: int) -> RockType:
        return self._grid[self._idx(x, y, z)]


@dataclass(frozen=True)
class CavernConfig:
    """Cellular-automaton parameters for cavern generation."""

    initial_fill: float = 0.45
    smoothing_iterations: int = 5
    birth_threshold: int = 5
    death_threshold: int = 4


class CavernGenerator:
    """2D cavern map grown by a cellular automaton; True cells are solid."""

    def __init__(
        self,
        width: int,
        height: int,
        config: CavernConfig | None = None,
        seed: int = 42,
    ) -> None:
        self.width = width
        self.height = height
        self._config = config if config is not None else CavernConfig()
        self._rng = random.Random(seed)
        self._map: list[bool] = [False] * (width * height)

    @property
    def config(self) -> CavernConfig:
        return self._config

    @property
    def map(self) -> Sequence[bool]:
        return tuple(self._map)

    def generate(self) -> None:
        """Random fill followed by the configured number of smoothing passes."""
        fill = self._config.initial_fill
        self._map = [self._rng.random() < fill for _ in self._map]
        for _ in range(self._config.smoothing_iterations):
            self.smooth()

    def smooth(self) -> None:
        """One automaton pass over interior cells; the border is left as is."""
        c = self._config
        new_map = list(self._map)
        for y in range(1, self.height - 1):
            for x in range(1, self.width - 1):
                neighbors = self._count_neighbors(x, y)
                i = x + self.width * y
                threshold = c.death_threshold if self._map[i] else c.birth_threshold
                new_map[i] = neighbors >= threshold
        self._map = new_map

    def _count_neighbors(self, x: int, y: int) -> int:
        return sum(
            self._map[(x + dx) + self.width * (y + dy)]
            for dy in (-1, 0, 1)
            for dx in (-1, 0, 1)
            if dx or dy
        )

    def is_open(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"cell ({x}, {y}) is outside the map")
        return not self._map[x + self.width * y]


@dataclass
class MineralDeposit:
    """An ore deposit that can be mined."""

    x: int
    y: int
    z: int
    type: RockType
    quantity: float  # kg
    purity: float  # 0..1


class MineralSystem:
    """Places ore deposits on a geology volume and tracks their extraction."""

    def __init__(self, width: int, height: int, depth: int) -> None:
        self.width = width
        self.height = height
        self.depth = depth
        self._deposits: list[MineralDeposit] = []
        self._rng = random.Random(42)

    @property
    def deposits(self) -> Sequence[MineralDeposit]:
        return tuple(self._deposits)

    def generate_deposits(self, geology: GeologyGenerator, count: int = 20) -> None:
        """Sample ``count`` random cells and keep those holding ore."""
        rng = self._rng
        self._deposits.clear()
        for _ in range(count):
            x = rng.randint(0, self.width - 1)
            y = rng.randint(0, self.height - 1)
            z = rng.randint(0, self.depth - 1)
            rock = geology.get(x, y, z)
            if rock >= RockType.ORE_IRON:
                self._deposits.append(
                    MineralDeposit(
                        x=x,
                        y=y,
                        z=z,
                        type=rock,
                        quantity=rng.uniform(100, 10000),
                        purity=rng.uniform(0.2, 0.95),
                    )
                )

    def extract(self, deposit_idx: int, amount_kg: float) -> float:
        """Mine up to ``amount_kg``; returns the pure mass, 0 for unknown deposits."""
        if not 0 <= deposit_idx < len(self._deposits):
            return 0.0
        deposit = self._deposits[deposit_idx]
        extracted = min(deposit.quantity, amount_kg)
        deposit.quantity -= extracted
        return extracted * deposit.purity