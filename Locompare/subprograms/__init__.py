"""
This module contains the subprograms of Locompare.
"""

from . import configure, compare, loci
