"""postshelf — load, check and index a directory of front-matter posts."""

__version__ = "0.1.0"
