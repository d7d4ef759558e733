"""A console arcade game of barrels, ladders and ghosts, with levels read from .screen files."""

__version__ = "0.1.0"
__all__ = ["__version__"]