"""Respiratory gas exchange and haemoglobin oxygen binding."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass(frozen=True)
class HemoglobinConfig:
    """Oxygen dissociation curve parameters."""

    p50_base: float = 26.6  # mmHg at pH 7.4
    hill_coefficient: float = 2.7
    hemoglobin_normal: float = 14.0  # g/dL


class HemoglobinModel:
    """Hill-equation oxygen binding with Bohr, CO2 and temperature shifts."""

    def __init__(self, config: HemoglobinConfig | None = None) -> None:
        self._config = config if config is not None else HemoglobinConfig()
        self._p50 = self._config.p50_base

    @property
    def config(self) -> HemoglobinConfig:
        return self._config

    @property
    def p50(self) -> float:
        return self._p50

    def compute_saturation(
        self,
        po2_mmhg: float,
        ph: float = 7.4,
        pco2_mmhg: float = 40.0,
        temp_c: float = 37.0,
    ) -> float:
        """Fractional O2 saturation of haemoglobin."""
        p50 = self._config.p50_base
        p50 *= 10.0 ** (-0.48 * (ph - 7.4))
        p50 *= 10.0 ** (0.0024 * (pco2_mmhg - 40.0))
        p50 *= 10.0 ** (0.024 * (temp_c - 37.0))
        ratio = (po2_mmhg / p50) ** self._config.hill_coefficient
        return ratio / (1.0 + ratio)

    def compute_oxygen_content(
        self, po2_mmhg: float, hemoglobin_gdl: float, ph: float = 7.4
    ) -> float:
        """Arterial O2 content in mL O2/dL: bound plus dissolved."""
        sao2 = self.compute_saturation(po2_mmhg, ph)
        return hemoglobin_gdl * 1.34 * sao2 + 0.003 * po2_mmhg


@dataclass
class RespiratoryConfig:
    """Breathing pattern and inspired gas."""

    tidal_volume_ml: float = 500.0
    dead_space_ml: float = 150.0
    respiratory_rate: float = 12.0
    fio2: float = 0.21
    atmospheric_pressure: float = 760.0


@dataclass
class RespiratoryState:
    """Arterial gases, ventilation and metabolic gas exchange."""

    pao2: float = 95.0  # mmHg
    paco2: float = 40.0  # mmHg
    sao2: float = 0.97
    minute_ventilation: float = 0.0  # L/min
    alveolar_ventilation: float = 0.0  # L/min
    vo2: float = 250.0  # mL/min
    vco2: float = 200.0  # mL/min


class RespiratorySystem:
    """Alveolar gas exchange equilibrating arterial gases toward targets."""

    def __init__(self, config: RespiratoryConfig | None = None) -> None:
        self._config = (
            dataclasses.replace(config) if config is not None else RespiratoryConfig()
        )
        self._state = RespiratoryState()
        self._hemoglobin = HemoglobinModel()
        self._update_ventilation()

    @property
    def state(self) -> RespiratoryState:
        return self._state

    @property
    def config(self) -> RespiratoryConfig:
        return self._config

    @property
    def respiratory_rate(self) -> float:
        return self._config.respiratory_rate

    @respiratory_rate.setter
    def respiratory_rate(self, rate: float) -> None:
        self._config.respiratory_rate = rate

    @property
    def tidal_volume(self) -> float:
        return self._config.tidal_volume_ml

    @tidal_volume.setter
    def tidal_volume(self, volume_ml: float) -> None:
        self._config.tidal_volume_ml = volume_ml

    def step(
        self,
        dt: float,
        ambient_po2: float,
        ambient_pco2: float,
        metabolic_rate: float = 1.0,
    ) -> RespiratoryState:
        """Advance by dt seconds and return a snapshot of the state."""
        s = self._state
        self._update_ventilation()

        s.vo2 = 250.0 * metabolic_rate
        s.vco2 = 200.0 * metabolic_rate

        tau = 5.0
        pao2_ideal = self._alveolar_gas_equation(self._config.fio2, s.paco2)
        s.pao2 += (pao2_ideal - s.pao2) * dt / tau

        paco2_target = 40.0 * (s.vco2 / 200.0) / max(0.1, s.alveolar_ventilation / 4.2)
        s.paco2 += (paco2_target - s.paco2) * dt / tau

        s.pao2 = min(max(s.pao2, 20.0), 150.0)
        s.paco2 = min(max(s.paco2, 15.0), 80.0)
        s.sao2 = self._hemoglobin.compute_saturation(s.pao2)
        return dataclasses.replace(s)

    def _update_ventilation(self) -> None:
        c, s = self._config, self._state
        s.minute_ventilation = c.tidal_volume_ml * c.respiratory_rate / 1000.0
        s.alveolar_ventilation = (
            (c.tidal_volume_ml - c.dead_space_ml) * c.respiratory_rate / 1000.0
        )

    def _alveolar_gas_equation(self, fio2: float, paco2: float) -> float:
        inspired = (self._config.atmospheric_pressure - 47) * fio2
        return inspired - paco2 / 0.8