"""Pearldive cavern core.

Procedural cavern generation and grid pathfinding for the underwater arcade
game. Scenes, rendering and entity placement live in the game itself and call
into the two components:

* ``pearldive.src.generation`` builds seeded caverns and loads level settings.
* ``pearldive.src.navigation`` rasterizes wall rectangles and plans paths.

Neither component imports the other; ``pearldive.level`` converts a cavern
grid into the wall rectangles the navigation grid consumes.
"""
