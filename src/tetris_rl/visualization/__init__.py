"""Pygame front-end and input timing helpers."""
