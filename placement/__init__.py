"""
Field placement module.

Coordinate conversion between the rendered page and native PDF space,
viewport tracking, calibration and the in-memory placement session.
"""
