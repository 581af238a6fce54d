"""Widgets, frames and a frame loop for touch-driven e-paper panels, modelled in memory."""

__version__ = "0.1.0"