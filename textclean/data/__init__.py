"""
Data loading and static resources.

This subpackage provides:
- functions to load the tweet dataset and the data configuration
- stopword, contraction and abbreviation resources used by the pipeline.
"""
