"""Build a static front-end project and publish it to GitHub Pages."""

__version__ = "0.1.0"
