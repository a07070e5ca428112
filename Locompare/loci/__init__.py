"""
This module contains the classes needed to index the genes of an annotation
and to cluster them into loci.
"""

from .feature_index import FeatureIndex
from .locus import Locus
from .clusterer import LocusClusterer, PairwiseLocusClusterer
