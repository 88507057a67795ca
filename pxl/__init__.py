"""pxl: terminal-first pixel art editor.

Layered RGBA sprites, palettes, and procedurally assembled chibi characters
rendered across eight view directions and packed into sprite sheets.
"""

__version__ = "0.1.0"
