"""
Product LCA Test Suite.

Test Categories:
- Quality: Pedigree scoring, representativeness, uncertainty, assessment
- Impacts: Category totals, facility allocation, GHG decomposition
- Engine and CLI: Combined product assessment end to end
"""
