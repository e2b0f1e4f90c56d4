"""
PktTrim - capture payload trimming tool
"""

__version__ = "0.1.0"
