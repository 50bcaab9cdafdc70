"""
NeighborGood - crime statistics by street address.

Subpackages:
    - records: incident record model, typed years, payload decoding
    - analysis: per-year aggregation and trend classification
    - formatting: display formatting for record dates
    - locations: street-name index over the reference location dataset
    - shared: configuration and logging
"""

__version__ = "0.1.0"
