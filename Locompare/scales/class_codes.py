"""
This module contains the definitions of the classification codes for a comparison
between a reference and a prediction transcript clique.
"""

import enum


class ClassCode(enum.IntEnum):

    """
    Classification of a clique pair. The order of the members is the order in which
    the classification rules are evaluated: the first matching rule wins.
    """

    PERFECT_MATCH = 0
    MISLABELED = 1
    CDS_MATCH = 2
    EXON_MATCH = 3
    UTR_MATCH = 4
    NON_MATCH = 5

    @property
    def definition(self):
        return _definitions[self]

    @property
    def label(self):
        return self.name.lower().replace("_", " ")

    def __str__(self):
        return self.label


_definitions = {
    ClassCode.PERFECT_MATCH: "CDS, exon and UTR structures match perfectly, with full nucleotide identity",
    ClassCode.MISLABELED: "CDS and exon structures match, but the 5' and 3' UTRs are swapped",
    ClassCode.CDS_MATCH: "CDS structures match, exon or UTR structures do not",
    ClassCode.EXON_MATCH: "Exon structures match, CDS structures do not",
    ClassCode.UTR_MATCH: "UTR structures match, neither CDS nor exon structures do",
    ClassCode.NON_MATCH: "No structure matches",
}
