"""Blood chemistry with a Henderson-Hasselbalch pH model."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

_PKA_CARBONIC_ACID = 6.1


class AcidBaseDisorder(IntEnum):
    """Acid-base disorder classification."""

    NORMAL = 0
    METABOLIC_ACIDOSIS = 1
    METABOLIC_ALKALOSIS = 2
    RESPIRATORY_ACIDOSIS = 3
    RESPIRATORY_ALKALOSIS = 4
    MIXED = 5


@dataclass
class BloodGasValues:
    """Arterial blood gas values."""

    pH: float = 7.40
    pCO2: float = 40.0  # mmHg
    pO2: float = 95.0  # mmHg
    HCO3: float = 24.0  # mEq/L
    base_excess: float = 0.0  # mEq/L
    lactate: float = 1.0  # mmol/L
    sao2: float = 0.97  # fraction


@dataclass
class ElectrolytePanel:
    """Serum electrolyte panel."""

    sodium: float = 140.0  # mEq/L
    potassium: float = 4.0  # mEq/L
    chloride: float = 102.0  # mEq/L
    bicarbonate: float = 24.0  # mEq/L
    calcium: float = 9.5  # mg/dL
    magnesium: float = 2.0  # mg/dL
    phosphate: float = 3.5  # mg/dL

    def anion_gap(self) -> float:
        return self.sodium - (self.chloride + self.bicarbonate)


@dataclass
class BloodChemistrySystem:
    """Acid-base state, electrolytes and lactate of the blood."""

    abg: BloodGasValues = field(default_factory=BloodGasValues)
    electrolytes: ElectrolytePanel = field(default_factory=ElectrolytePanel)
    lactate: float = 1.0
    lactate_clearance_rate: float = 0.5

    def compute_ph(self) -> float:
        """Recompute arterial pH from bicarbonate and pCO2, clamped to 6.8..7.8."""
        hco3 = max(1.0, self.electrolytes.bicarbonate)
        pco2 = max(1.0, self.abg.pCO2)
        ph = _PKA_CARBONIC_ACID + math.log10(hco3 / (0.03 * pco2))
        self.abg.pH = min(max(ph, 6.8), 7.8)
        return self.abg.pH

    def compute_base_excess(self) -> float:
        be = self.electrolytes.bicarbonate - 24.4 + 16.2 * (self.abg.pH - 7.4)
        self.abg.base_excess = be
        return be

    def add_lactate(self, amount_mmol: float) -> None:
        """Add lactate, buffered by bicarbonate down to a floor of 5 mEq/L."""
        self.lactate += amount_mmol
        consumed = min(amount_mmol, self.electrolytes.bicarbonate - 5.0)
        self.electrolytes.bicarbonate -= consumed

    def clear_lactate(self, dt: float) -> None:
        """Clear lactate over dt seconds, regenerating bicarbonate up to 30 mEq/L."""
        clearance = self.lactate * self.lactate_clearance_rate * dt / 60.0
        self.lactate = max(0.5, self.lactate - clearance)
        self.electrolytes.bicarbonate = min(
            30.0, self.electrolytes.bicarbonate + clearance * 0.5
        )