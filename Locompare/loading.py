# coding: utf-8

"""
This module loads the genes of a GFF3 annotation into the feature arena and indexes them.
"""

import collections
from .exceptions import InvalidTranscript
from .loci.feature_index import FeatureIndex
from .parsers.GFF import GFF3
from .transcripts.arena import FeatureArena
from .transcripts.reference_gene import Gene
from .transcripts.transcript import Transcript
from .utilities.log_utils import create_null_logger


def load_gff3(parser: GFF3, arena: FeatureArena, label="reference", logger=None) -> FeatureIndex:
    """
    Load the genes of a GFF3 file into the arena and return the index of the annotation.
    Lines can come in any order. Transcripts without a gene get a mock one; genes without
    valid transcripts and repeated transcript IDs are discarded with a warning.

    :param parser: the GFF3 parser.
    :type parser: GFF3
    :param arena: the arena which will own the genes.
    :type arena: FeatureArena
    :param label: label of the annotation.
    :param logger: optional logger.

    :rtype: FeatureIndex
    """

    if logger is None:
        logger = create_null_logger()

    genes = collections.OrderedDict()
    transcripts = collections.OrderedDict()
    segments = collections.defaultdict(list)

    for row in parser:
        if row.header is True:
            continue
        if row.is_gene:
            if row.id in genes:
                logger.warning("Repeated gene ID in the %s annotation: %s", label, row.id)
                continue
            genes[row.id] = Gene(row, source=label, logger=logger)
        elif row.is_transcript:
            if row.id in transcripts:
                logger.warning("Repeated transcript ID in the %s annotation: %s. Discarding the copy.",
                               label, row.id)
                continue
            transcripts[row.id] = Transcript(row, source=label, logger=logger)
        elif row.is_exon:
            for parent in row.parent:
                segments[parent].append(row)

    for tid, transcript in transcripts.items():
        try:
            for row in segments.pop(tid, []):
                transcript.add_exon(row)
            if transcript.parent in genes:
                genes[transcript.parent].add(transcript)
            elif transcript.parent is not None:
                logger.debug("Gene %s not found for %s, creating a mock one", transcript.parent, tid)
                genes[transcript.parent] = Gene(transcript, source=label, logger=logger)
            else:
                gene = Gene(transcript, source=label, logger=logger)
                if gene.id in genes:
                    genes[gene.id].add(transcript)
                else:
                    genes[gene.id] = gene
        except InvalidTranscript as exc:
            logger.warning("Discarding the %s transcript %s: %s", label, tid, exc)

    for parent in segments:
        logger.warning("Ignoring the features of %s, as it is not a transcript of the %s annotation",
                       parent, label)

    index = FeatureIndex(arena, label=label)
    for gene in genes.values():
        gene.finalize()
        if len(gene) == 0:
            logger.warning("Discarding the %s gene %s, as it has no valid transcript", label, gene.id)
            continue
        index.add(arena.add(gene))

    logger.info("Loaded %d genes on %d sequences from the %s annotation",
                len(index), len(index.sequence_ids()), label)
    return index
