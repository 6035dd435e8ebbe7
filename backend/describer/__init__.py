"""
Product Describer
=================

Pub/Sub-triggered product description enrichment for commercetools.
"""

__version__ = "1.0.0"
