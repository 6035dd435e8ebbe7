"""
External collaborators: Vision image analysis and commercetools persistence.
"""

from .commercetools import ProductRepository, ProductStore
from .vision import ImageAnalyzer, VisionImageAnalyzer

__all__ = [
    "ImageAnalyzer",
    "VisionImageAnalyzer",
    "ProductRepository",
    "ProductStore",
]
