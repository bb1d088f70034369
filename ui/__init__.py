"""
User interface modules.

This package contains user interface components:
- Command-line interface (CLI)
- Interactive track selection
"""
