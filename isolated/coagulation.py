"""Blood coagulation: clotting cascade, platelets, clots and anticoagulants."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import IntEnum


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


@dataclass
class ClottingFactor:
    """State of one coagulation factor."""

    concentration: float = 1.0  # relative to normal
    activity: float = 1.0  # functional activity
    inhibited: bool = False


@dataclass
class Clot:
    """A clot forming at a location."""

    location_id: int
    fibrin_mass: float = 0.0  # mg
    platelet_count: float = 0.0
    stability: float = 0.0  # 0..1
    age_seconds: float = 0.0
    is_stable: bool = False


class AnticoagulantType(IntEnum):
    """Anticoagulant drug class."""

    NONE = 0
    HEPARIN = 1
    WARFARIN = 2
    ASPIRIN = 3
    DIRECT_Xa = 4
    DIRECT_IIa = 5


@dataclass
class CoagulationState:
    """Platelets, clotting factors and laboratory values."""

    platelet_count: float = 250000.0  # per uL
    activated_platelets: float = 0.0

    factor_VII: ClottingFactor = field(default_factory=ClottingFactor)
    factor_VIII: ClottingFactor = field(default_factory=ClottingFactor)
    factor_IX: ClottingFactor = field(default_factory=ClottingFactor)
    factor_X: ClottingFactor = field(default_factory=ClottingFactor)
    factor_II: ClottingFactor = field(default_factory=ClottingFactor)
    fibrinogen: ClottingFactor = field(default_factory=ClottingFactor)

    pt_seconds: float = 12.0
    ptt_seconds: float = 30.0
    inr: float = 1.0
    d_dimer: float = 0.0  # ug/mL

    bleeding_tendency: float = 0.0  # 0..1
    clotting_tendency: float = 0.0  # 0..1

    def factors(self) -> tuple[ClottingFactor, ...]:
        return (
            self.factor_VII,
            self.factor_VIII,
            self.factor_IX,
            self.factor_X,
            self.factor_II,
            self.fibrinogen,
        )


class CoagulationSystem:
    """Clotting cascade with platelet dynamics and clot lifecycle."""

    def __init__(self) -> None:
        self._state = CoagulationState()
        self._clots: list[Clot] = []
        self._anticoagulant = AnticoagulantType.NONE
        self._anticoagulant_level = 0.0

    @property
    def state(self) -> CoagulationState:
        return self._state

    @property
    def clots(self) -> tuple[Clot, ...]:
        return tuple(self._clots)

    @property
    def active_anticoagulant(self) -> AnticoagulantType:
        return self._anticoagulant

    # ------------------------------------------------------------------
    # Cascade activation and platelets
    # ------------------------------------------------------------------

    def activate_extrinsic_pathway(self, tissue_factor: float) -> None:
        f = self._state.factor_VII
        f.activity = min(2.0, f.activity + tissue_factor * 0.5)

    def activate_intrinsic_pathway(self, contact_activation: float) -> None:
        for f in (self._state.factor_VIII, self._state.factor_IX):
            f.activity = min(2.0, f.activity + contact_activation * 0.3)

    def activate_platelets(self, stimulus: float) -> None:
        s = self._state
        activation = stimulus * s.platelet_count / 250000.0
        if self._anticoagulant is AnticoagulantType.ASPIRIN:
            activation *= 0.3
        s.activated_platelets = min(
            s.activated_platelets + activation * 10000.0, s.platelet_count * 0.8
        )

    def compute_platelet_aggregation(self, shear_rate: float) -> float:
        """Aggregation rate; high shear promotes von Willebrand aggregation."""
        base = self._state.activated_platelets / 100000.0
        if shear_rate > 1000:
            return base * (1.0 + shear_rate / 5000.0)
        return base

    # ------------------------------------------------------------------
    # Clots
    # ------------------------------------------------------------------

    def form_clot(self, location: int, severity: float) -> None:
        s = self._state
        clot = Clot(
            location_id=location,
            fibrin_mass=severity * 10.0,
            platelet_count=s.activated_platelets * severity * 0.1,
        )
        s.activated_platelets -= clot.platelet_count
        self._clots.append(clot)

    def lyse_clot(self, clot_idx: int, tpa_activity: float) -> None:
        """Dissolve part of a clot with tPA; indexes past the end are ignored."""
        if not 0 <= clot_idx < len(self._clots):
            return
        clot = self._clots[clot_idx]
        clot.fibrin_mass -= tpa_activity * 0.5
        self._state.d_dimer += tpa_activity * 0.1
        if clot.fibrin_mass <= 0:
            del self._clots[clot_idx]

    def compute_clot_time(self, injury_severity: float) -> float:
        """Seconds to form a stable clot."""
        s = self._state
        factor_modifier = (
            s.factor_X.activity + s.factor_II.activity + s.fibrinogen.concentration
        ) / 3.0
        platelet_modifier = s.platelet_count / 250000.0
        return 300.0 / (factor_modifier * platelet_modifier * injury_severity)

    # ------------------------------------------------------------------
    # Anticoagulants
    # ------------------------------------------------------------------

    def apply_anticoagulant(self, anticoagulant: AnticoagulantType, dose: float) -> None:
        s = self._state
        self._anticoagulant = AnticoagulantType(anticoagulant)
        self._anticoagulant_level = dose

        if anticoagulant is AnticoagulantType.HEPARIN:
            for f in (s.factor_X, s.factor_II):
                f.activity *= 1.0 - dose * 0.3
        elif anticoagulant is AnticoagulantType.WARFARIN:
            for f in (s.factor_VII, s.factor_IX, s.factor_X, s.factor_II):
                f.concentration *= 1.0 - dose * 0.4
        elif anticoagulant is AnticoagulantType.DIRECT_Xa:
            s.factor_X.inhibited = True
        elif anticoagulant is AnticoagulantType.DIRECT_IIa:
            s.factor_II.inhibited = True

    def clear_anticoagulant(self, dt: float) -> None:
        self._anticoagulant_level = max(0.0, self._anticoagulant_level - 0.01 * dt)
        if self._anticoagulant_level < 0.1:
            self._anticoagulant = AnticoagulantType.NONE
            self._state.factor_X.inhibited = False
            self._state.factor_II.inhibited = False

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def step(self, dt: float) -> CoagulationState:
        """Advance by dt seconds and return a snapshot of the state."""
        self._cascade_extrinsic(dt)
        self._cascade_intrinsic(dt)
        self._cascade_common(dt)
        self._process_clots(dt)
        self._update_lab_values()
        self.clear_anticoagulant(dt)

        s = self._state
        for f in s.factors():
            if not f.inhibited:
                f.activity += (1.0 - f.activity) * 0.001 * dt
                f.concentration += (1.0 - f.concentration) * 0.0001 * dt

        s.platelet_count += (250000.0 - s.platelet_count) * 0.0001 * dt
        s.activated_platelets *= 1.0 - 0.01 * dt
        s.d_dimer *= 1.0 - 0.001 * dt
        return copy.deepcopy(s)

    def _cascade_extrinsic(self, dt: float) -> None:
        s = self._state
        if s.factor_VII.activity > 1.0:
            activation = (s.factor_VII.activity - 1.0) * 0.5 * dt
            s.factor_X.activity += activation
            s.factor_VII.activity -= activation * 0.1

    def _cascade_intrinsic(self, dt: float) -> None:
        s = self._state
        if s.factor_VIII.activity > 1.0 and s.factor_IX.activity > 1.0:
            activation = min(s.factor_VIII.activity, s.factor_IX.activity) * 0.3 * dt
            s.factor_X.activity += activation

    def _cascade_common(self, dt: float) -> None:
        s = self._state
        if s.factor_X.activity > 1.0 and not s.factor_X.inhibited:
            s.factor_II.activity += (s.factor_X.activity - 1.0) * 0.4 * dt

        if s.factor_II.activity > 1.0 and not s.factor_II.inhibited:
            for clot in self._clots:
                if not clot.is_stable:
                    clot.fibrin_mass += (s.factor_II.activity - 1.0) * dt
                    clot.stability += 0.01 * dt
                    if clot.stability >= 1.0:
                        clot.is_stable = True

    def _update_lab_values(self) -> None:
        s = self._state
        extrinsic = (
            s.factor_VII.activity * s.factor_X.activity * s.factor_II.activity
        ) / 3.0
        s.pt_seconds = 12.0 / max(0.1, extrinsic)

        intrinsic = (
            s.factor_VIII.activity * s.factor_IX.activity * s.factor_X.activity
        ) / 3.0
        s.ptt_seconds = 30.0 / max(0.1, intrinsic)

        s.inr = s.pt_seconds / 12.0
        s.bleeding_tendency = _clamp(
            (s.pt_seconds - 12.0) / 10.0 + (1.0 - s.platelet_count / 150000.0),
            0.0,
            1.0,
        )
        s.clotting_tendency = _clamp(
            s.factor_X.activity - 1.0 + s.activated_platelets / 200000.0, 0.0, 1.0
        )

    def _process_clots(self, dt: float) -> None:
        for clot in self._clots:
            clot.age_seconds += dt
            if clot.is_stable and clot.age_seconds > 3600:
                clot.fibrin_mass -= 0.001 * dt
                self._state.d_dimer += 0.0001 * dt
        self._clots = [c for c in self._clots if c.fibrin_mass > 0]