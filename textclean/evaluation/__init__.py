"""
Aggregation and reporting utilities.

This subpackage offers:
- token frequency tables and top-k rankings
- per-document and per-period counts
- plotting functions for exploring a cleaned corpus.
"""
