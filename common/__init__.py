"""
Shared infrastructure (configuration loading, logging, export helpers)
used by the photoelectric simulator package.
"""
