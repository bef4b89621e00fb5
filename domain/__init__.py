"""LTE Dimensioning Domain Layer.

This package contains the core business logic organized by bounded contexts:
- coverage: RF propagation, path-loss models, link budget, range solving
- siting: Cell sizing, site count, model recommendation
"""

# Imports alphabetized per project style (isort)
from domain import coverage, siting

__all__ = ["coverage", "siting"]
