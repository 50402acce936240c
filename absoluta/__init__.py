"""Absoluta Store: storefront logic and payment functions"""

__version__ = "1.0.0"
