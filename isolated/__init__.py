"""Simulation systems for an underground world: grid heat transfer, human physiology and procedural geology."""

__version__ = "1.0.0"