"""logic — Game systems package.

Modules
-------
tick            — per-frame system pipeline for one level's World
game_state      — level/score state machine with deferred rebuilds
navigation      — player tank controls and autopath following
pathfinding     — BFS shortest path on the maze grid
pursuit         — pursuers walking straight at the player
combat          — player attack ray and kill resolution
spawning        — player and pursuer placement for a fresh level
input_manager   — raw input → intent mapping
"""
