"""
bombgrid – tile-based bomb-and-crate arcade game.

The simulation (grid, state, systems) runs without a display; app.py
wires it to pygame. See app.py for the entrypoint.
"""
__all__ = [
    "app",
    "components",
    "constants",
    "ecs",
    "events",
    "grid",
    "mapgen",
    "state",
]
