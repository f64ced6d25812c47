"""
Top-level package for the tweet text-cleaning walkthrough.

This package contains modules for:
- data loading and static lexical resources
- normalization, tokenization, filtering and stemming/lemmatization
- token frequency aggregation and exploratory plots
- shared helper functions (config, logging)

The stages are combined by ``textclean.features.pipeline.TextPipeline``.
"""

__version__ = "0.1.0"
