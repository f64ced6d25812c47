"""
Shared utility functions.

This subpackage includes:
- run configuration loading
- directory management
- logging helpers used by the scripts
- the configuration error raised while building a pipeline.
"""
