"""Value types, delta transform and special functions."""

from beta_ab.core import types, special, delta

__all__ = ["types", "special", "delta"]
