# isolated

Simulation systems for an underground survival world. It covers heat transfer on a grid, human physiology and procedural geology. The package is a library of plain Python classes. It has no command-line entry point.

## Modules

### Thermal

- `isolated.materials` holds `MaterialProperties` and the read-only `MATERIALS` table, keyed by name. Names include `"air"`, `"water"`, `"granite"`, `"steel"` and `"uranium_ore"`.
- `isolated.heat_engine` provides `ThermalConfig`, `Phase` and `ThermalEngine`, a numpy-backed grid solver. Each `step(dt)` runs these stages in order:
  1. conduction
  2. upwind advection
  3. heat sources
  4. radioactive decay heat
  5. Stefan–Boltzmann radiation above `radiation_threshold`
  6. enthalpy-based melting and boiling

  Cells are addressed as `(x, y, z)`. A coordinate outside the grid raises `IndexError`.
- `isolated.evaporative` provides the psychrometric functions `saturation_vapor_pressure`, `relative_humidity`, `dew_point` and `wet_bulb_temperature`. It also has `EvaporativeCooling` with `calculate`, `human_evaporative_cooling` and the static `heat_index`.

### Physiology

Each system keeps its state in a dataclass, available through `.state`. Most `step` methods return a snapshot copy of that state.

- `isolated.blood_chemistry`: `BloodChemistrySystem` handles pH from the Henderson–Hasselbalch equation, base excess, and lactate buffering and clearance.
- `isolated.immune`: `ImmuneSystem` models infections, white-cell counts, fever and sepsis.
- `isolated.muscular`: `MuscularSystem` models ATP, phosphocreatine, glycogen, fatigue, lactate and oxygen debt.
- `isolated.brain_perfusion`: `BrainPerfusionSystem` models ICP, CPP, cerebral blood flow, brain oxygenation, GCS and herniation risk. Treatments are `perform_craniotomy`, `drain_csf` and `administer_mannitol`.
- `isolated.coagulation`: `CoagulationSystem` models the clotting cascade, platelets, clots, lab values (PT, PTT, INR) and `AnticoagulantType` drugs.
- `isolated.integumentary`: `IntegumentarySystem` models `Wound` and `Burn` healing, bleeding and infection. It also supports bandaging and debridement.
- `isolated.ventilation`: `VentilationSystem` models dead space, V/Q matching, work of breathing, muscle fatigue and `VentilationMode` support.
- `isolated.respiration`: `HemoglobinModel` gives Hill-equation saturation with Bohr, CO2 and temperature shifts. `RespiratorySystem` models alveolar gas exchange.

### World generation

- `isolated.worldgen`:
  - `NoiseGenerator`: seeded Perlin noise with `fbm2d` and `fbm3d`.
  - `GeologyGenerator`: a `RockType` volume with ore pockets.
  - `CavernGenerator`: a cellular-automaton cave map.
  - `MineralSystem`: ore deposits and their extraction.

  All of these take a seed, and the same seed gives the same output.
- `isolated.hydrology`: `HydrologySystem` handles `Aquifer` recharge and breaches, `WaterTable` diffusion, `FloodState` zones with pumping and drainage, and erosion.
- `isolated.biomes`: `BiomeSystem` handles `Ecosystem` population dynamics, `BioluminescentRegion` light and `FossilDeposit` layers.
- `isolated.geology_dynamics`: `GeologyDynamicsSystem` handles excavation stress, supports, `FaultLine` stress and earthquakes, and cave-ins.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install .[test]
```

## Examples

Heat a granite cell and let it cool:

```python
from isolated.heat_engine import ThermalConfig, ThermalEngine

engine = ThermalEngine(ThermalConfig(nx=10, ny=10, nz=1, dx=1.0))
engine.set_material(5, 5, 0, "granite")
engine.set_temperature(5, 5, 0, 600.0)
for _ in range(10):
    engine.step(0.1)
print(engine.get_temperature(5, 5, 0))
```

Apply a head injury and advance the brain model by one second:

```python
from isolated.brain_perfusion import BrainPerfusionSystem

brain = BrainPerfusionSystem()
brain.apply_head_trauma(0.6)
brain.step(1.0, 90.0, 95.0, 40.0, 0.42)
print(brain.state.icp, brain.state.gcs.total())
```

Generate a cave map:

```python
from isolated.worldgen import CavernConfig, CavernGenerator

caves = CavernGenerator(64, 64, CavernConfig(), seed=7)
caves.generate()
print(caves.is_open(10, 10))
```

## What the package does not do

- There is no rendering, window or user interface. There is also no command to run.
- Nothing loads, saves or streams world chunks. All state lives in memory.
- There is no GPU computation. `ThermalConfig(use_gpu=True)` makes `ThermalEngine.step` leave the field unchanged, on the expectation that an external accelerator owns it.
- The physiology systems are independent of one another. The caller passes values between them, such as arterial gases or mean arterial pressure.

## Running the tests

```
pytest
```