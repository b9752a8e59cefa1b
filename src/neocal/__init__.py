"""
neocal - command-line calendar viewer
"""

__version__ = '1.0.0'
