"""Approxoffset - Approximate polygon offsets as labeled curve cycles.

Approxoffset computes the boundary of the offset of a simple polygon by a
radius r (its Minkowski sum with a disc) as a closed cycle of line segments and
x-monotone circular arcs. Irrational offset points are replaced by exact
rational points within a caller-supplied error bound, and every curve carries
a label (direction, cycle id, index, last flag) for arrangement insertion.

Example:
    $ approxoffset polygons.json --radius 1 --epsilon 0.01

This will create polygons-offset.json with one convolution cycle per polygon.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
