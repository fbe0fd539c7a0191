"""Maze Battle Arena: grid pathfinding battles and a winner predictor."""

__version__ = "0.1.0"
