"""
Study 01: Colony Growth

Scatter the colony, then watch.

Questions to explore:
- How many ticks before trails become visible?
- Do agents collapse onto a few loops or keep spreading?
- How does the picture change when the grid is smaller than the colony?
"""
