"""scenes — pygame scenes.

world_scene  the playable tile view
world_draw   tile, HUD and inventory drawing helpers
"""
