"""Experiment simulation for empirical confidence and power."""

from beta_ab.simulation import experiments

__all__ = ["experiments"]
