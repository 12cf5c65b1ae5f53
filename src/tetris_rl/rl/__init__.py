"""Agents and training scripts for the Tetris environment."""
