#!/usr/bin/env python3
"""
PDF Example: Right-Aligned Text with a Shadow

Renders the same layout onto a single PDF page sized to the text.
"""

from pathlib import Path

from textcanvas import PDFSurface, TextCanvas

canvas = TextCanvas(
    "Side A\nSide B",
    {"fontWeight": "bold", "fontSize": 36, "textAlign": "right", "shadowColor": "#999999", "shadowOffsetX": 2},
    surface=PDFSurface(),
)

Path("sides.pdf").write_bytes(canvas.render())

print("✓ PDF saved to: sides.pdf")
