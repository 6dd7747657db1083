"""cellsim — a minimal artificial-life simulation of energy-driven cells."""

__version__ = "0.1.0"
