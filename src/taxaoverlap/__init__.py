"""
TAXA-overlap - cast overlap finder

Looks up a movie or series on TMDB and reports which of its cast members
also appeared in the reference series TAXA, ranked by how much they did.
"""

__version__ = "0.1.0"
__author__ = "TAXA-overlap Team"

__all__ = ["__version__"]
