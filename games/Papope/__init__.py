"""
Papope - a timed head-splitting arcade game.

- simulation: HeadSimulation (motion, bounces, hits, split policy)
- session: SessionController (countdown and lifecycle)
- arena: Arena bounds and the screen <-> arena mapping
- game_mode: PapopeMode, the pygame front end
"""
