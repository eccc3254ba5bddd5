#!/usr/bin/env python3
"""
Simple Example: Wrapped, Centered Text

This is the simplest way to render a block of text to a PNG.
"""

from textcanvas import TextCanvas

canvas = TextCanvas(
    "The quick brown fox jumps over the lazy dog.\nPack my box with five dozen liquor jugs.",
    {
        "fontFamily": "serif",
        "fontSize": 28,
        "textAlign": "center",
        "textColor": "#223344",
        "wordWrap": 320,
    },
    resolution=2,
)

image = canvas.render()
image.save("wrapped.png")

print(f"✓ {len(canvas.layout().lines)} lines saved to: wrapped.png ({image.width}x{image.height}px)")
