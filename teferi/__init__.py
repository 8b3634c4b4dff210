"""
Teferi calendar - date-range driven calendar state for a time-tracking app.
"""

__version__ = "0.1.0"
