"""Psychrometrics and evaporative cooling from wet surfaces and skin."""

from __future__ import annotations

import math
from dataclasses import dataclass

_GAS_CONSTANT_WATER_VAPOR = 461.5  # J/(kg*K)


def saturation_vapor_pressure(t: float) -> float:
    """Saturation vapour pressure in Pa at ``t`` degrees Celsius (Magnus formula)."""
    return 610.78 * math.exp(17.27 * t / (t + 237.3))


def relative_humidity(p_vapor: float, t: float) -> float:
    """Relative humidity (0..1) of air at ``t`` degrees Celsius holding ``p_vapor`` Pa."""
    ratio = p_vapor / saturation_vapor_pressure(t)
    return min(max(ratio, 0.0), 1.0)


def dew_point(t: float, rh: float) -> float:
    """Dew point in degrees Celsius; dry air gives roughly absolute zero."""
    if rh <= 0.0:
        return -273.15
    alpha = math.log(rh) + 17.27 * t / (t + 237.3)
    return 237.3 * alpha / (17.27 - alpha)


def wet_bulb_temperature(t: float, rh: float) -> float:
    """Wet-bulb temperature in degrees Celsius (Stull approximation)."""
    rh_pct = rh * 100.0
    return (
        t * math.atan(0.151977 * math.sqrt(rh_pct + 8.313659))
        + math.atan(t + rh_pct)
        - math.atan(rh_pct - 1.676331)
        + 0.00391838 * rh_pct**1.5 * math.atan(0.023101 * rh_pct)
        - 4.686035
    )


@dataclass
class EvaporationState:
    """Result of an evaporation calculation."""

    evap_rate: float = 0.0  # kg/s of water evaporated
    cooling_power: float = 0.0  # W of cooling
    humidity_change: float = 0.0  # moisture added to the air


@dataclass(frozen=True)
class CoolingConfig:
    """Physical constants of the evaporation model."""

    latent_heat: float = 2.26e6  # J/kg
    lewis_number: float = 0.9
    mass_transfer_coeff: float = 0.01  # kg/(m^2*s)


class EvaporativeCooling:
    """Evaporative heat loss from wet surfaces and sweating skin."""

    def __init__(self, config: CoolingConfig | None = None) -> None:
        self._config = config if config is not None else CoolingConfig()

    @property
    def config(self) -> CoolingConfig:
        return self._config

    def calculate(
        self,
        t_surface: float,
        t_air: float,
        rh: float,
        area: float,
        air_velocity: float,
    ) -> EvaporationState:
        """Evaporation from a wet surface of ``area`` m^2 into moving air."""
        p_sat_surface = saturation_vapor_pressure(t_surface)
        p_vapor_air = saturation_vapor_pressure(t_air) * rh
        delta_p = p_sat_surface - p_vapor_air
        if delta_p <= 0:
            return EvaporationState()

        h_m = self._config.mass_transfer_coeff * (1.0 + 0.5 * math.sqrt(air_velocity))
        t_avg = (t_surface + t_air) / 2.0 + 273.15
        evap_rate = h_m * area * delta_p / (_GAS_CONSTANT_WATER_VAPOR * t_avg)
        return EvaporationState(
            evap_rate=evap_rate,
            cooling_power=evap_rate * self._config.latent_heat,
            humidity_change=evap_rate,
        )

    def human_evaporative_cooling(
        self, skin_temp: float, t_air: float, rh: float, sweat_rate: float
    ) -> float:
        """Heat lost in W by sweating at ``sweat_rate`` L/h."""
        p_sat_skin = saturation_vapor_pressure(skin_temp)
        p_vapor = saturation_vapor_pressure(t_air) * rh
        max_evap = min(max((p_sat_skin - p_vapor) / p_sat_skin, 0.0), 1.0)
        sweat_kg_s = sweat_rate / 3600.0
        return sweat_kg_s * max_evap * self._config.latent_heat

    @staticmethod
    def heat_index(t: float, rh: float) -> float:
        """Feels-like temperature in degrees Celsius (Rothfusz regression)."""
        t_f = t * 9.0 / 5.0 + 32.0
        rh_pct = rh * 100.0
        if t_f < 80.0:
            return t
        hi = (
            -42.379
            + 2.04901523 * t_f
            + 10.14333127 * rh_pct
            - 0.22475541 * t_f * rh_pct
            - 6.83783e-3 * t_f * t_f
            - 5.481717e-2 * rh_pct * rh_pct
            + 1.22874e-3 * t_f * t_f * rh_pct
            + 8.5282e-4 * t_f * rh_pct * rh_pct
            - 1.99e-6 * t_f * t_f * rh_pct * rh_pct
        )
        return (hi - 32.0) * 5.0 / 9.0