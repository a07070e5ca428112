"""
The feature arena owns every gene loaded for a run. Genes are addressed through
integer handles, which are what loci, indices and the clusterers store and compare.
"""

import threading
from .reference_gene import Gene


class FeatureArena:

    """
    Append-only store of finalized genes. A handle is the position of the gene in the arena.
    Once a gene has been added it is never replaced or removed.
    """

    def __init__(self):
        self.__genes = []
        self.__lock = threading.Lock()

    def add(self, gene: Gene) -> int:
        """
        Add a gene to the arena, finalizing it if necessary.
        :rtype: int
        :returns: the handle of the gene.
        """

        if not isinstance(gene, Gene):
            raise TypeError("Only genes can be stored in the arena, not {}".format(type(gene)))
        gene.finalize()
        with self.__lock:
            self.__genes.append(gene)
            return len(self.__genes) - 1

    def __getitem__(self, handle: int) -> Gene:
        if isinstance(handle, bool) or not isinstance(handle, int) or handle < 0:
            raise KeyError(handle)
        try:
            return self.__genes[handle]
        except IndexError:
            raise KeyError(handle)

    def __len__(self):
        return len(self.__genes)

    def __iter__(self):
        return iter(range(len(self.__genes)))

    def transcripts(self, handles):
        """Iterate over the transcripts of the genes with the given handles."""
        for handle in handles:
            yield from self[handle].transcripts.values()
