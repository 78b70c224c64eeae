"""
Channel Catalog Pipeline
"""

__version__ = "1.0.0"
