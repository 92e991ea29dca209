"""core package initialization.

Engine-level primitives shared by every system: the ECS world, the
event bus, tuning, the maze grid and its collision queries, and the
pygame app shell.
"""

__all__ = ["app", "collision", "constants", "ecs", "events", "maze", "scene", "tuning"]
