"""Falling-block puzzle game engine with Gymnasium and pygame front-ends."""

__version__ = "0.1.0"
