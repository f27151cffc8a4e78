"""
MediaShelf - rate and review movies, books and podcasts.
"""

from .core.config import VERSION

__version__ = VERSION
