"""Two-dimensional rigid body simulation with collisions, connections and a software rasterizer."""

__version__ = "0.1.0"