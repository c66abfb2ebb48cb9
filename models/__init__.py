"""Data models and utility functions.

This package contains:
- color: RGB to xy / HSV conversion and gamut helpers
- types: Colour values, state deltas and command status
- utils: Utility functions (similarity_score, format_light_line, etc.)
"""
