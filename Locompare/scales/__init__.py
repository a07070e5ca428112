"""
This module contains the comparison machinery: transcript cliques, model vectors,
clique pair statistics and classification, pair selection, accounting and reporting.
"""

from .class_codes import ClassCode
from .comparison import UNDEFINED, StructureStats, NucleotideStats, ComparisonStats
from .clique import TranscriptClique, build_cliques
from .clique_pair import CliquePair, compare_pairs, compare_pairs_reverse
from .locus_comparison import LocusResult, compare_locus
from .accountant import Accountant
from .compare import compare_annotations, cluster_annotations
