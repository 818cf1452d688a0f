"""
Studies: runnable observations of the colony.

Each study begins with observation, not hypothesis.

Study progression:
1. Colony growth - watch a random colony turn into a network
"""
