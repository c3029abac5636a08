"""logic — Gameplay rules package.

Top-level modules
-----------------
movement       one-step moves and the facing pointer
combat         simultaneous melee exchange
actions        interact handler table keyed by ActionType
enemies        wall-clock gated enemy wandering
input_manager  pygame key → intent mapping with repeat filter
"""
