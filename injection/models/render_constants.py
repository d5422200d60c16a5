"""
Fixed rendering rules for burned-in fields, in PDF points.
Kept as module constants; no per-field overrides.
"""
from __future__ import annotations

FONT_NAME = "Helvetica"
FONT_SIZE = 10.0
TEXT_COLOR = (0.0, 0.0, 0.0)

TEXT_INSET = 4.0                     # left padding of text inside the box
BORDER_WIDTH = 2.0
BORDER_COLOR = (0.2, 0.2, 0.2)

RADIO_CENTER_OFFSET = 10.0           # circle centre from the box's left edge
RADIO_RADIUS = 5.0
RADIO_DOT_RADIUS = 3.0
RADIO_BORDER_WIDTH = 1.0
RADIO_LABEL_OFFSET = 20.0            # label start from the box's left edge
RADIO_COLOR = (0.0, 0.0, 0.0)
RADIO_CHECKED_VALUES = frozenset({"checked", "true"})
