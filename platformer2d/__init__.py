"""A small 2D side-scrolling platformer built on pygame: animation, collision, timing, input and the game loop."""

__version__ = "0.1.0"