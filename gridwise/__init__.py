"""
Gridwise - Grid Balancing Puzzle Engine

A single-player card puzzle: keep a grid of generators and consumers in
non-negative balance across four times of day (night, day, evening, flex)
while replacing the starting Fossil generators with better cards.

The engine provides:
- Card catalog and incentive compatibility
- Balance and placement rules
- Shop composition
- Turn progression and win detection
"""

__version__ = "0.1.0"
