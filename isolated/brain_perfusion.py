"""Brain perfusion and neurological state.

Cerebral autoregulation (Lassen curve), intracranial pressure dynamics,
cerebral perfusion pressure, herniation risk and Glasgow Coma Scale.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field

_NORMAL_INTRACRANIAL_VOLUME_ML = 1500.0


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


@dataclass
class CerebralConfig:
    """Autoregulation, pressure-volume and metabolic parameters."""

    map_lower: float = 60.0  # mmHg, below this CBF drops linearly
    map_upper: float = 150.0  # mmHg, above this CBF rises linearly
    cbf_normal: float = 50.0  # mL/100g/min

    icp_normal: float = 10.0  # mmHg
    icp_critical: float = 20.0  # mmHg
    icp_herniation: float = 40.0  # mmHg
    compliance: float = 0.5  # mL/mmHg
    csf_production: float = 0.35  # mL/min
    csf_absorption: float = 0.35  # mL/min at normal ICP

    cmro2_normal: float = 3.5  # mL O2/100g/min
    brain_mass: float = 1400.0  # g


@dataclass
class GCSComponents:
    """Glasgow Coma Scale components."""

    eye_response: int = 4  # 1..4
    verbal_response: int = 5  # 1..5
    motor_response: int = 6  # 1..6

    def total(self) -> int:
        return self.eye_response + self.verbal_response + self.motor_response

    def is_severe(self) -> bool:
        return self.total() <= 8

    def is_moderate(self) -> bool:
        return 9 <= self.total() <= 12

    def is_mild(self) -> bool:
        return self.total() >= 13


@dataclass
class BrainState:
    """Pressures, volumes, oxygenation and consciousness of the brain."""

    icp: float = 10.0  # mmHg
    cpp: float = 80.0  # mmHg
    cbf: float = 50.0  # mL/100g/min

    brain_volume: float = 1200.0  # mL
    csf_volume: float = 150.0  # mL
    blood_volume: float = 150.0  # mL
    edema_volume: float = 0.0  # mL

    brain_pO2: float = 25.0  # mmHg
    sctO2: float = 70.0  # %

    contusion_volume: float = 0.0  # mL
    herniation_risk: float = 0.0  # 0..1
    is_herniating: bool = False

    gcs: GCSComponents = field(default_factory=GCSComponents)
    consciousness: float = 1.0  # 0..1


class BrainPerfusionSystem:
    """Intracranial pressure, cerebral blood flow and consciousness."""

    def __init__(self, config: CerebralConfig | None = None) -> None:
        self._config = (
            dataclasses.replace(config) if config is not None else CerebralConfig()
        )
        self._state = BrainState()

    @property
    def state(self) -> BrainState:
        return self._state

    @property
    def config(self) -> CerebralConfig:
        return self._config

    def step(
        self,
        dt: float,
        map_pressure: float,
        pao2: float,
        paco2: float,
        hematocrit: float,
    ) -> None:
        """Advance by dt seconds at the given mean arterial pressure and blood gases."""
        self._update_icp(dt)
        self._update_cpp(map_pressure)
        self._update_cbf(map_pressure, paco2)
        self._update_brain_oxygenation(dt, pao2, hematocrit)
        self._update_consciousness()
        self._update_herniation_risk()

    # ------------------------------------------------------------------
    # Trauma
    # ------------------------------------------------------------------

    def add_contusion(self, volume_ml: float) -> None:
        self._state.contusion_volume += volume_ml
        self._state.brain_volume += volume_ml * 0.5

    def add_edema(self, volume_ml: float) -> None:
        self._state.edema_volume += volume_ml

    def apply_head_trauma(self, severity: float) -> None:
        """Apply a head injury of severity 0..1."""
        self.add_contusion(severity * 30.0)
        if severity > 0.3:
            gcs = self._state.gcs
            gcs.eye_response = max(1, gcs.eye_response - int(severity * 2))
            gcs.motor_response = max(1, gcs.motor_response - int(severity * 3))
            gcs.verbal_response = max(1, gcs.verbal_response - int(severity * 2))

    # ------------------------------------------------------------------
    # Treatment
    # ------------------------------------------------------------------

    def perform_craniotomy(self) -> None:
        """Decompressive craniectomy: more compliance, ICP capped at 15 mmHg."""
        self._config.compliance *= 3.0
        self._state.icp = min(self._state.icp, 15.0)

    def drain_csf(self, volume_ml: float) -> None:
        s = self._state
        s.csf_volume = max(50.0, s.csf_volume - volume_ml)
        s.icp = max(0.0, s.icp - volume_ml / self._config.compliance)

    def administer_mannitol(self, dose_g: float) -> None:
        """Osmotic therapy reducing brain water."""
        s = self._state
        water_reduction = dose_g * 2.0
        s.edema_volume = max(0.0, s.edema_volume - water_reduction)
        s.brain_volume = max(1100.0, s.brain_volume - water_reduction * 0.5)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _update_icp(self, dt: float) -> None:
        s, c = self._state, self._config
        total = (
            s.brain_volume
            + s.csf_volume
            + s.blood_volume
            + s.edema_volume
            + s.contusion_volume
        )
        excess = total - _NORMAL_INTRACRANIAL_VOLUME_ML
        if excess > 0:
            rise = excess / c.compliance
            if excess > 50.0:
                rise *= math.exp((excess - 50.0) / 30.0)
            s.icp = c.icp_normal + rise
        else:
            s.icp = max(0.0, c.icp_normal + excess / (c.compliance * 2.0))

        absorption = c.csf_absorption * (s.icp / c.icp_normal)
        s.csf_volume += (c.csf_production - absorption) * dt / 60.0
        s.csf_volume = _clamp(s.csf_volume, 50.0, 200.0)

    def _update_cpp(self, map_pressure: float) -> None:
        self._state.cpp = max(0.0, map_pressure - self._state.icp)

    def _update_cbf(self, map_pressure: float, paco2: float) -> None:
        s, c = self._state, self._config
        cbf_base = c.cbf_normal
        if map_pressure < c.map_lower:
            cbf_base = c.cbf_normal * (map_pressure / c.map_lower)
        elif map_pressure > c.map_upper:
            cbf_base = c.cbf_normal * (1.0 + 0.3 * (map_pressure - c.map_upper) / 50.0)

        co2_factor = _clamp(1.0 + 0.03 * (paco2 - 40.0), 0.5, 2.0)
        cpp_factor = s.cpp / 50.0 if s.cpp < 50.0 else 1.0
        s.cbf = max(0.0, cbf_base * co2_factor * cpp_factor)

    def _update_brain_oxygenation(
        self, dt: float, pao2: float, hematocrit: float
    ) -> None:
        s, c = self._state, self._config
        delivery = s.cbf * pao2 * hematocrit * 0.003
        consumption = c.cmro2_normal * (c.brain_mass / 100.0)
        target = _clamp(25.0 * (delivery / consumption), 0.0, 50.0)
        tau = 30.0
        s.brain_pO2 += (target - s.brain_pO2) * (1.0 - math.exp(-dt / tau))
        s.sctO2 = 100.0 * s.brain_pO2 / (s.brain_pO2 + 26.0)

    def _update_consciousness(self) -> None:
        s = self._state
        cbf_factor = min(1.0, s.cbf / 20.0)
        o2_factor = min(1.0, s.brain_pO2 / 15.0)
        icp_factor = 1.0 if s.icp < 30.0 else max(0.0, 1.0 - (s.icp - 30.0) / 20.0)
        s.consciousness = _clamp(cbf_factor * o2_factor * icp_factor, 0.0, 1.0)

        gcs = s.gcs
        if s.consciousness < 0.3:
            gcs.eye_response = 1
            gcs.verbal_response = 1
            gcs.motor_response = max(1, int(s.consciousness * 10))
        elif s.consciousness < 0.6:
            gcs.eye_response = 2
            gcs.verbal_response = 2
            gcs.motor_response = 4
        elif s.consciousness < 0.9:
            gcs.eye_response = 3
            gcs.verbal_response = 4
            gcs.motor_response = 5
        # Otherwise the GCS keeps its current, possibly trauma-depressed, level.

    def _update_herniation_risk(self) -> None:
        s, c = self._state, self._config
        if s.icp < c.icp_critical:
            s.herniation_risk = 0.0
        else:
            excess = s.icp - c.icp_critical
            span = c.icp_herniation - c.icp_critical
            risk = min(1.0, excess / span)
            if risk > 0.5:
                risk = 0.5 + 0.5 * ((risk - 0.5) * 2.0) ** 2
            s.herniation_risk = risk
        s.is_herniating = s.icp >= c.icp_herniation