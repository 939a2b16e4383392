"""Thermal properties of the materials known to the simulation."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class MaterialProperties:
    """Thermal properties of one material (SI units, temperatures in kelvin)."""

    name: str
    thermal_conductivity: float  # W/(m*K)
    specific_heat: float  # J/(kg*K)
    density: float  # kg/m^3
    emissivity: float  # 0..1
    melting_point: float  # K, 0 when not applicable
    boiling_point: float  # K, 0 when not applicable
    latent_heat_fusion: float  # J/kg
    latent_heat_vaporization: float  # J/kg


_TABLE = [
    # Gases
    ("air", 0.026, 1005, 1.225, 0.0, 0, 0, 0, 0),
    # Liquids
    ("water", 0.6, 4186, 1000, 0.95, 273.15, 373.15, 334000, 2260000),
    ("magma", 1.5, 1500, 2700, 0.95, 1073, 1573, 400000, 0),
    # Ices
    ("ice", 2.2, 2090, 917, 0.97, 273.15, 373.15, 334000, 2260000),
    ("co2_ice", 0.5, 850, 1560, 0.9, 194.65, 194.65, 571000, 571000),
    # Rock
    ("granite", 2.5, 790, 2700, 0.9, 1500, 3000, 0, 0),
    ("basalt", 1.7, 840, 2900, 0.9, 1473, 1573, 400000, 0),
    ("limestone", 1.3, 840, 2600, 0.9, 1600, 2850, 0, 0),
    ("sandstone", 1.7, 920, 2300, 0.9, 1500, 2800, 0, 0),
    ("shale", 1.5, 800, 2400, 0.9, 1400, 2700, 0, 0),
    ("marble", 2.8, 880, 2700, 0.9, 1500, 2950, 0, 0),
    ("regolith", 0.02, 800, 1500, 0.92, 1473, 3000, 300000, 0),
    ("soil", 0.5, 800, 1500, 0.9, 1200, 2500, 0, 0),
    # Manufactured
    ("steel", 50.0, 500, 7850, 0.3, 1800, 3000, 270000, 0),
    # Biological
    ("flesh", 0.5, 3500, 1050, 0.98, 0, 0, 0, 0),
    # Ores
    ("iron_ore", 2.0, 700, 4500, 0.85, 1538, 3000, 0, 0),
    ("copper_ore", 2.5, 500, 5000, 0.85, 1085, 2562, 0, 0),
    ("gold_ore", 3.0, 500, 5500, 0.85, 1064, 2856, 0, 0),
    ("coal", 0.2, 1300, 1400, 0.9, 0, 0, 0, 0),  # burns rather than melts
    ("uranium_ore", 2.5, 700, 3000, 0.85, 1408, 4404, 0, 0),
]

MATERIALS: Mapping[str, MaterialProperties] = MappingProxyType(
    {
        row[0]: MaterialProperties(row[0], *(float(value) for value in row[1:]))
        for row in _TABLE
    }
)
"""Standard material database, keyed by material name."""