"""
Selection of the clique pairs to report at a locus.
"""

from functools import cmp_to_key
from .clique_pair import compare_pairs_reverse


def select_pairs(pairs, refr_cliques, pred_cliques):
    """
    Greedily select the best pairs such that no transcript is reported twice.
    The pairs are ranked best-first; a pair is accepted when none of its transcripts has been
    claimed by a previously accepted pair. The transcripts left unclaimed are reported through
    the unmatched cliques, largest first.

    :param pairs: the compared pairs of the locus.
    :type pairs: list[Locompare.scales.clique_pair.CliquePair]
    :param refr_cliques: all the reference cliques of the locus.
    :param pred_cliques: all the prediction cliques of the locus.

    :returns: the selected pairs, the unmatched reference cliques and the novel prediction cliques.
    :rtype: (list, list, list)
    """

    refr_claimed, pred_claimed = set(), set()
    selected = []
    for pair in sorted(pairs, key=cmp_to_key(compare_pairs_reverse)):
        if not pair.needs_comparison:
            continue
        if refr_claimed.intersection(pair.refr_clique.ids) or pred_claimed.intersection(pair.pred_clique.ids):
            continue
        selected.append(pair)
        refr_claimed.update(pair.refr_clique.ids)
        pred_claimed.update(pair.pred_clique.ids)

    return selected, unmatched_cliques(refr_cliques, refr_claimed), unmatched_cliques(pred_cliques, pred_claimed)


def unmatched_cliques(cliques, claimed):
    """
    Cover the unclaimed transcripts with the cliques whose transcripts are all unclaimed,
    preferring larger cliques. Each transcript appears in at most one unmatched clique.
    :param cliques: candidate cliques.
    :param claimed: set of the IDs of the transcripts already reported.
    :rtype: list
    """

    claimed = set(claimed)
    unmatched = []
    for clique in sorted(cliques, key=lambda _: -len(_)):
        if clique.is_empty or claimed.intersection(clique.ids):
            continue
        unmatched.append(clique)
        claimed.update(clique.ids)
    return unmatched
