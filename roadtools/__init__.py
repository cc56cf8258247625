"""Procedural road junction geometry, lane splines, signal phasing and road layout queries."""

__version__ = "0.1.0"