"""
This module defines the transcript cliques, i.e. the sets of transcripts of one annotation
at a locus which can coexist because their exons do not overlap, and the functions
needed to enumerate them.
"""

from collections import Counter
from itertools import combinations
import networkx
from ..utilities.log_utils import create_null_logger
from .model_vector import ModelVector


class TranscriptClique:

    """
    Ordered set of mutually exon-disjoint transcripts from one annotation.
    A clique without transcripts is the empty clique, used when one side of a locus has no transcripts.

    :param transcripts: the transcripts of the clique.
    :type transcripts: list[Locompare.transcripts.transcript.Transcript]
    """

    def __init__(self, transcripts=()):
        self.transcripts = tuple(sorted(transcripts))
        self.__ids = tuple(transcript.id for transcript in self.transcripts)

    @classmethod
    def empty(cls):
        return cls()

    @property
    def is_empty(self):
        return len(self.transcripts) == 0

    @property
    def ids(self):
        return self.__ids

    @property
    def id(self):
        if self.is_empty:
            return "None"
        return ",".join(self.__ids)

    @property
    def exons(self):
        return sorted(exon for transcript in self.transcripts for exon in transcript.exons)

    @property
    def cds(self):
        return sorted(segment for transcript in self.transcripts for segment in transcript.combined_cds)

    @property
    def utrs(self):
        """UTR segments, labelled as five_prime_utr or three_prime_utr."""
        return sorted(utr for transcript in self.transcripts for utr in transcript.utrs)

    @property
    def has_utrs(self):
        return len(self.utrs) > 0

    @property
    def exon_count(self):
        return sum(transcript.exon_num for transcript in self.transcripts)

    @property
    def cds_length(self):
        return sum(transcript.cds_length for transcript in self.transcripts)

    def model_vector(self, start, end) -> ModelVector:
        return ModelVector(self, start, end)

    def format(self, prefix=""):
        """GFF3 representation of the transcripts of the clique."""
        return "\n".join(transcript.format(prefix=prefix) for transcript in self.transcripts)

    def __iter__(self):
        return iter(self.transcripts)

    def __len__(self):
        return len(self.transcripts)

    def __eq__(self, other):
        if not isinstance(other, TranscriptClique):
            return NotImplemented
        return self.__ids == other.ids

    def __hash__(self):
        return hash(self.__ids)

    def __repr__(self):
        return "TranscriptClique({0})".format(self.id)


def compatible(transcript, other):
    """Two transcripts can be part of the same clique if their exons do not overlap."""
    return not transcript.exon_overlap(other)


def compatibility_graph(transcripts: dict) -> networkx.Graph:
    """
    Graph of the transcripts, keyed by ID, where two transcripts are connected
    if they are compatible.
    :param transcripts: dictionary of the transcripts, keyed by ID.
    :rtype: networkx.Graph
    """

    graph = networkx.Graph()
    graph.add_nodes_from(transcripts.keys())
    for tid, other_tid in combinations(sorted(transcripts.keys()), 2):
        if compatible(transcripts[tid], transcripts[other_tid]):
            graph.add_edge(tid, other_tid)
    return graph


def build_cliques(transcripts, logger=None) -> list:
    """
    Enumerate the cliques of a set of transcripts from one annotation: one clique for each
    transcript, followed by every maximal group of two or more mutually compatible transcripts.

    :param transcripts: the transcripts of one annotation at a locus.
    :param logger: optional logger.
    :rtype: list[TranscriptClique]
    """

    if logger is None:
        logger = create_null_logger()

    transcripts = sorted(transcripts)
    if len(transcripts) <= 1:
        return [TranscriptClique(transcripts)] if transcripts else []

    objects = dict((transcript.id, transcript) for transcript in transcripts)
    if len(objects) != len(transcripts):
        duplicated = [tid for tid, count in Counter(_.id for _ in transcripts).items() if count > 1]
        raise ValueError("Duplicated transcript IDs: {0}".format(", ".join(sorted(duplicated))))

    graph = compatibility_graph(objects)
    cliques = [TranscriptClique([transcript]) for transcript in transcripts]
    # Bron-Kerbosch; singletons are already listed above
    larger = [TranscriptClique([objects[tid] for tid in clique])
              for clique in networkx.find_cliques_recursive(graph) if len(clique) > 1]
    cliques.extend(sorted(larger, key=lambda clique: (-len(clique), clique.ids)))
    logger.debug("Built %d cliques from %d transcripts", len(cliques), len(transcripts))
    return cliques
