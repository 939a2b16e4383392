"""Underground biomes: ecosystems, bioluminescence and fossil deposits."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence


class OrganismType(Enum):
    """Broad class of an underground organism."""

    BACTERIA = "bacteria"
    FUNGUS = "fungus"
    ALGAE = "algae"
    LICHEN = "lichen"
    CAVE_FAUNA = "cave_fauna"
    EXTREMOPHILE = "extremophile"


@dataclass
class Organism:
    """A population of organisms and its environmental needs."""

    organism_type: OrganismType = OrganismType.BACTERIA
    population: float = 1000.0  # relative units
    growth_rate: float = 0.1  # per day
    death_rate: float = 0.05  # per day

    min_temp: float = 5.0  # deg C
    max_temp: float = 40.0
    min_humidity: float = 0.3  # 0..1
    optimal_ph: float = 7.0

    photosynthetic: bool = False
    bioluminescent: bool = False
    light_output: float = 0.0  # lux

    o2_production: float = 0.0  # mol/day
    co2_consumption: float = 0.0
    organic_production: float = 0.0


@dataclass
class Ecosystem:
    """Organisms living together under shared conditions."""

    organisms: list[Organism] = field(default_factory=list)

    temperature: float = 20.0  # deg C
    humidity: float = 0.5  # 0..1
    ph: float = 7.0
    organic_matter: float = 100.0  # kg
    mineral_nutrients: float = 50.0

    ambient_light: float = 0.0  # lux
    bioluminescence: float = 0.0  # lux from organisms

    o2_level: float = 0.21
    co2_level: float = 0.0004
    h2s_level: float = 0.0

    def total_population(self) -> float:
        return sum(org.population for org in self.organisms)

    def total_light(self) -> float:
        return self.ambient_light + self.bioluminescence


@dataclass
class BioluminescentRegion:
    """A glowing patch of cave with light falling off from its centre."""

    x: int
    y: int
    z: int
    radius: int = 10
    intensity: float = 50.0  # lux at centre
    dominant_species: str = "glow_fungus"

    def light_at(self, px: int, py: int, pz: int) -> float:
        dist = math.dist((px, py, pz), (self.x, self.y, self.z))
        if dist > self.radius:
            return 0.0
        return self.intensity / (1.0 + dist * dist / (self.radius * self.radius))


class FossilType(Enum):
    """Kind of fossil found in a deposit."""

    INVERTEBRATE = "invertebrate"
    FISH = "fish"
    AMPHIBIAN = "amphibian"
    REPTILE = "reptile"
    MAMMAL = "mammal"
    PLANT = "plant"
    TRACE = "trace"


@dataclass
class FossilDeposit:
    """A cube of rock holding fossils."""

    x: int
    y: int
    z: int
    extent: int = 5
    fossil_type: FossilType = FossilType.INVERTEBRATE
    age_million_years: float = 300.0
    density: float = 1.0  # fossils per m^3
    quality: float = 0.5  # 0..1 preservation
    discovered: bool = False

    def value(self) -> float:
        """Scientific and economic value of the deposit."""
        age_factor = math.log10(self.age_million_years + 1)
        return age_factor * self.quality * self.quality * self.density * 1000.0


@dataclass(frozen=True)
class BiomeConfig:
    """Update cadence and environmental rates."""

    ecosystem_update_rate: float = 86400.0  # seconds between updates
    nutrient_regeneration: float = 0.01  # per day
    light_decay: float = 0.1  # per metre depth


class BiomeSystem:
    """Ecosystems, glowing regions and fossil deposits of the underground."""

    def __init__(self, config: BiomeConfig | None = None) -> None:
        self._config = config if config is not None else BiomeConfig()
        self._ecosystems: dict[str, Ecosystem] = {}
        self._glow_regions: list[BioluminescentRegion] = []
        self._fossils: list[FossilDeposit] = []
        self._rng = random.Random(42)
        self._accumulated_time = 0.0

    @property
    def config(self) -> BiomeConfig:
        return self._config

    @property
    def glow_regions(self) -> Sequence[BioluminescentRegion]:
        return tuple(self._glow_regions)

    @property
    def fossils(self) -> Sequence[FossilDeposit]:
        return tuple(self._fossils)

    def add_ecosystem(self, eco_id: str, eco: Ecosystem) -> None:
        self._ecosystems[eco_id] = eco

    def add_bioluminescent_region(self, region: BioluminescentRegion) -> None:
        self._glow_regions.append(dataclasses.replace(region))

    def add_fossil_deposit(self, deposit: FossilDeposit) -> None:
        self._fossils.append(dataclasses.replace(deposit))

    def step(self, dt: float) -> None:
        """Advance by dt seconds; populations update once per update period."""
        self._accumulated_time += dt
        if self._accumulated_time >= self._config.ecosystem_update_rate:
            for eco in self._ecosystems.values():
                self._update_ecosystem(eco)
            self._accumulated_time = 0.0
        self._update_bioluminescence()

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def seed_cave_ecosystem(self, eco_id: str, depth: float) -> None:
        """Create a dark, humid cave ecosystem; deep fungi glow."""
        glowing = depth > 100
        eco = Ecosystem(
            temperature=15.0 - depth * 0.01,
            humidity=0.8,
            ambient_light=0.0,
            organisms=[
                Organism(
                    organism_type=OrganismType.BACTERIA,
                    population=1e6,
                    growth_rate=0.2,
                ),
                Organism(
                    organism_type=OrganismType.FUNGUS,
                    population=1000,
                    growth_rate=0.05,
                    bioluminescent=glowing,
                    light_output=10.0 if glowing else 0.0,
                ),
            ],
        )
        self._ecosystems[eco_id] = eco

    def seed_hydrothermal_ecosystem(self, eco_id: str, temperature: float) -> None:
        """Create a hot vent ecosystem of chemosynthetic life."""
        eco = Ecosystem(
            temperature=temperature,
            humidity=1.0,
            h2s_level=0.001,
            organisms=[
                Organism(
                    organism_type=OrganismType.EXTREMOPHILE,
                    population=1e8,
                    growth_rate=0.5,
                    min_temp=50.0,
                    max_temp=120.0,
                    o2_production=0.1,
                ),
                Organism(
                    organism_type=OrganismType.CAVE_FAUNA,
                    population=100,
                    growth_rate=0.01,
                ),
            ],
        )
        self._ecosystems[eco_id] = eco

    def generate_fossil_layer(
        self, z: int, fossil_type: FossilType, age: float
    ) -> None:
        """Scatter three to seven fossil deposits across layer ``z``."""
        rng = self._rng
        count = 3 + rng.randrange(5)
        for _ in range(count):
            x = int(rng.uniform(0.0, 256.0))
            y = int(rng.uniform(0.0, 256.0))
            quality = rng.uniform(0.1, 0.9)
            density = 0.5 + rng.uniform(0.1, 0.9)
            self._fossils.append(
                FossilDeposit(
                    x=x,
                    y=y,
                    z=z,
                    fossil_type=fossil_type,
                    age_million_years=age,
                    quality=quality,
                    density=density,
                )
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_bioluminescence_at(self, x: int, y: int, z: int) -> float:
        return sum(region.light_at(x, y, z) for region in self._glow_regions)

    def get_fossil_at(self, x: int, y: int, z: int) -> FossilDeposit | None:
        """First deposit whose cube contains the point, if any."""
        for deposit in self._fossils:
            if (
                abs(x - deposit.x) <= deposit.extent
                and abs(y - deposit.y) <= deposit.extent
                and abs(z - deposit.z) <= deposit.extent
            ):
                return deposit
        return None

    def get_ecosystem(self, eco_id: str) -> Ecosystem | None:
        return self._ecosystems.get(eco_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update_ecosystem(self, eco: Ecosystem) -> None:
        eco.mineral_nutrients += self._config.nutrient_regeneration * eco.mineral_nutrients

        for org in eco.organisms:
            env_factor = self._environment_factor(eco, org)
            carrying_capacity = eco.organic_matter * 100.0
            growth = (
                org.growth_rate
                * env_factor
                * org.population
                * (1.0 - org.population / carrying_capacity)
            )
            death = org.death_rate * org.population
            org.population = max(0.0, org.population + growth - death)

            eco.o2_level += org.o2_production * org.population / 1e9
            eco.co2_level -= org.co2_consumption * org.population / 1e9

        eco.o2_level = min(max(eco.o2_level, 0.0), 0.5)
        eco.co2_level = min(max(eco.co2_level, 0.0), 0.1)

    @staticmethod
    def _environment_factor(eco: Ecosystem, org: Organism) -> float:
        if eco.temperature < org.min_temp or eco.temperature > org.max_temp:
            return 0.0
        temp_opt = (org.min_temp + org.max_temp) / 2.0
        factor = 1.0 - abs(eco.temperature - temp_opt) / (org.max_temp - org.min_temp)

        if eco.humidity < org.min_humidity:
            factor *= eco.humidity / org.min_humidity

        light = eco.total_light()
        if org.photosynthetic and light < 10.0:
            factor *= light / 10.0

        return min(max(factor, 0.0), 1.0)

    def _update_bioluminescence(self) -> None:
        for eco in self._ecosystems.values():
            eco.bioluminescence = sum(
                org.light_output * org.population / 1000.0
                for org in eco.organisms
                if org.bioluminescent
            )