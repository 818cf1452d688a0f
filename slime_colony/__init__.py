"""
Slime-Colony: Physarum-style trail following on a toroidal grid

A fixed population of point agents senses a shared trail field,
steers toward the strongest signal, and leaves a mark where it stands.
The network is what remains.
"""

__version__ = "0.1.0"
