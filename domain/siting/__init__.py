"""Siting Bounded Context.

Responsible for turning coverage range into a site plan:
- Value Objects: CellSizing, CalculationResult, ComparisonResult
- Services: hexagonal cell sizing, site count, model recommendation
"""
