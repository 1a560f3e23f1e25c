"""Scheduler option grids and accelerator defragmentation for GPU cluster scheduling experiments."""

__version__ = "0.1.0"

__all__ = ["definitions", "search_space", "experiment_setup", "defragmenter"]