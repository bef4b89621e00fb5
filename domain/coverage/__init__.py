"""Coverage Bounded Context.

Responsible for RF propagation and link budget analysis:
- Value Objects: LTEParameters, LinkBudget, FrequencyBand, CoverageSweep
- Services: path-loss models (Okumura-Hata, COST 231-Hata, 3GPP TR 36.814),
  link budget, range solver
"""
