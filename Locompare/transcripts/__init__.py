"""
This module contains the classes which describe transcripts and genes
and the arena which stores them.
"""

from .transcript import Transcript
from .reference_gene import Gene
from .arena import FeatureArena
