# coding: utf-8

"""
This module renders the results of a comparison as text: one report block per locus,
and a final summary of the whole run. Single-annotation loci are printed as GFF3.
"""

from .class_codes import ClassCode
from .comparison import format_ratio, ratio, UNDEFINED


_LOCUS_HEADER = ("|-------------------------------------------------\n"
                 "|---- Locus: {0}\n"
                 "|-------------------------------------------------\n"
                 "|")
_BEGIN = ("     |\n"
          "     |--------------------------\n"
          "     |---- Begin comparison ----\n"
          "     |--------------------------\n"
          "     |")
_END = ("     |\n"
        "     |--------------------------\n"
        "     |----- End comparison -----\n"
        "     |--------------------------\n"
        "     |")
_SUMMARY_LABELS = {
    ClassCode.PERFECT_MATCH: "perfect matches",
    ClassCode.MISLABELED: "perfect matches with mislabeled UTRs",
    ClassCode.CDS_MATCH: "CDS structure matches",
    ClassCode.EXON_MATCH: "exon structure matches",
    ClassCode.UTR_MATCH: "UTR structure matches",
    ClassCode.NON_MATCH: "non-matches",
}


def _row(label, *values):
    return "     |    " + " ".join(["{0:<30}".format(label)] + ["{0:<10}".format(_) for _ in values]).rstrip()


class LocusReportWriter:

    """
    Writer of the per-locus text report.

    :param out: output handle.
    :param configuration: the configuration of the run.
    :type configuration: Locompare.configuration.configuration.LocompareConfiguration
    """

    def __init__(self, out, configuration):
        self.out = out
        self.configuration = configuration

    def __print(self, *lines):
        print(*lines, sep="\n", file=self.out)

    def write(self, run):
        """Write the report for all the loci of a run."""
        for result in run.sorted_loci():
            self.write_locus(result)

    def write_locus(self, result):
        """
        Write the report of one locus.
        :type result: Locompare.scales.locus_comparison.LocusResult
        """

        locus = result.locus
        self.__print(_LOCUS_HEADER.format(locus.id))
        labels = self.configuration.labels
        for label, genes in ((labels.reference, locus.reference_genes), (labels.prediction, locus.prediction_genes)):
            self.__print("|  {0} genes:".format(label))
            if not genes:
                self.__print("|    None!")
            for gene in genes:
                self.__print("|    {0}".format(gene.id))
            self.__print("|")
        self.__print("|----------")

        for note in result.notes:
            self.__print("     |", "     | Warning: {0}".format(note))

        if result.skipped:
            self.__print("     |", "     | No comparisons were performed for this locus.",
                         "     | {0}.".format(result.skip_reason), "     |")
        else:
            for pair in result.pairs:
                self.write_pair(pair)
            for title, cliques in (
                    ("{0} transcripts (or transcript sets) without a {1} match".format(
                        labels.reference, labels.prediction), result.unique_refr),
                    ("novel {0} transcripts (or transcript sets)".format(labels.prediction), result.novel_pred)):
                if cliques:
                    self.__print("     |", "     |  {0}".format(title))
                    for clique in cliques:
                        self.__print("     | [{0}]".format(clique.id))
                    self.__print("     |")
        self.__print("")

    def write_pair(self, pair):
        """
        Write the comparison of a clique pair.
        :type pair: Locompare.scales.clique_pair.CliquePair
        """

        labels = self.configuration.labels
        self.__print(_BEGIN)
        for label, clique in ((labels.reference, pair.refr_clique), (labels.prediction, pair.pred_clique)):
            self.__print("     |  {0} transcripts:".format(label))
            for tid in clique.ids:
                self.__print("     |    {0}".format(tid))
        self.__print("     |")

        if self.configuration.compare.gff3 is True:
            for label, clique in ((labels.reference, pair.refr_clique), (labels.prediction, pair.pred_clique)):
                self.__print("     |  {0} GFF3:".format(label), clique.format(prefix="     |    "))
            self.__print("     |")

        if self.configuration.compare.model_vectors is True:
            self.__print("     |  model vectors:",
                         "     |    {0:<12} {1}".format(labels.reference, pair.refr_vector),
                         "     |    {0:<12} {1}".format(labels.prediction, pair.pred_vector),
                         "     |")

        stats = pair.stats
        for name, units, struc in (("CDS", "CDS segments", stats.cds_struc), ("Exon", "exons", stats.exon_struc),
                                   ("UTR", "UTR segments", stats.utr_struc)):
            self.__print("     |  {0} structure comparison".format(name))
            self.__print(*structure_lines(struc, units, labels, name))
            self.__print("     |")

        if pair.classification == ClassCode.PERFECT_MATCH:
            self.__print("     |    Gene structures match perfectly!")
        else:
            self.__print(*nucleotide_lines(stats))
        self.__print("     |", "     |    Classification: {0}".format(pair.classification))
        self.__print(_END)


def structure_lines(struc, units, labels, name):
    """Lines describing a structural comparison."""

    if struc.is_empty:
        return ["     |    No {0} annotated for this locus.".format(units)]
    elif struc.is_perfect:
        return ["     |    {0} {1:<10} {2}".format(struc.reference_units, labels.reference, units),
                "     |    {0} {1:<10} {2}".format(struc.prediction_units, labels.prediction, units),
                "     |    {0} structures match perfectly!".format(name)]
    return ["     |    {0} {1} {2}".format(struc.reference_units, labels.reference, units),
            "     |        {0} match {1}".format(struc.correct, labels.prediction),
            "     |        {0} don't match {1}".format(struc.missing, labels.prediction),
            "     |    {0} {1} {2}".format(struc.prediction_units, labels.prediction, units),
            "     |        {0} match {1}".format(struc.correct, labels.reference),
            "     |        {0} don't match {1}".format(struc.wrong, labels.reference),
            _row("Sensitivity:", format_ratio(struc.sensitivity)),
            _row("Specificity:", format_ratio(struc.specificity)),
            _row("F1 Score:", format_ratio(struc.f1)),
            _row("Annotation edit distance:", format_ratio(struc.edit_distance))]


def nucleotide_lines(stats):
    """Lines with the nucleotide-level comparison."""

    cds, utr = stats.cds_nuc, stats.utr_nuc
    return [_row("Nucleotide-level comparison", "CDS", "UTRs", "Overall"),
            _row("Matching coefficient:", format_ratio(cds.matching_coefficient),
                 format_ratio(utr.matching_coefficient), format_ratio(stats.overall_identity)),
            _row("Correlation coefficient:", format_ratio(cds.correlation_coefficient),
                 format_ratio(utr.correlation_coefficient), "--"),
            _row("Sensitivity:", format_ratio(cds.sensitivity), format_ratio(utr.sensitivity), "--"),
            _row("Specificity:", format_ratio(cds.specificity), format_ratio(utr.specificity), "--"),
            _row("F1 Score:", format_ratio(cds.f1), format_ratio(utr.f1), "--"),
            _row("Annotation edit distance:", format_ratio(cds.edit_distance),
                 format_ratio(utr.edit_distance), "--")]


def _percentage(numerator, denominator):
    value = ratio(numerator, denominator)
    if value is UNDEFINED:
        return "--"
    return "{0:.1f}%".format(value * 100)


def print_summary(run, out, configuration):
    """
    Print the summary of a run.

    :param run: the comparison run.
    :type run: Locompare.scales.compare.ComparisonRun
    :param out: output handle.
    :param configuration: the configuration of the run.
    """

    summary = run.summary
    counts = summary.counts
    labels = configuration.labels
    lines = ["  Summary of the comparison of the {0} and {1} annotations".format(labels.reference,
                                                                                labels.prediction),
             "",
             "  Sequences compared: {0}".format(len(run.loci))]
    for seqid, reason in run.failed_sequences.items():
        lines.append("    failed: {0} ({1})".format(seqid, reason))
    lines.extend(["",
                  "  Gene loci................................{0:<10}".format(counts.num_loci),
                  "    shared.................................{0:<10}".format(counts.shared),
                  "    unique to {0:.<29}{1:<10}".format(labels.reference, counts.unique_refr),
                  "    unique to {0:.<29}{1:<10}".format(labels.prediction, counts.unique_pred),
                  "    not compared (limits)..................{0:<10}".format(counts.skipped_loci),
                  "    with warnings..........................{0:<10}".format(counts.degraded_loci),
                  ""])

    for label, genes, transcripts in ((labels.reference, counts.refr_genes, counts.refr_transcripts),
                                      (labels.prediction, counts.pred_genes, counts.pred_transcripts)):
        lines.extend(["  {0} annotations".format(label.capitalize()),
                      "    genes..................................{0:<10}".format(genes),
                      "      average per locus....................{0:<10}".format(
                          format_ratio(ratio(genes, counts.num_loci))),
                      "    transcripts............................{0:<10}".format(transcripts),
                      "      average per locus....................{0:<10}".format(
                          format_ratio(ratio(transcripts, counts.num_loci))),
                      "      average per gene.....................{0:<10}".format(
                          format_ratio(ratio(transcripts, genes))),
                      ""])

    lines.append("  Total comparisons........................{0:<10}".format(counts.num_comparisons))
    lines.append("  Reported comparisons.....................{0:<10}".format(counts.reported_pairs))
    for code in ClassCode:
        description = summary.descriptions[code]
        lines.append("    {0:.<38}{1:<10}{2}".format(_SUMMARY_LABELS[code], counts.classes[code],
                                                     _percentage(counts.classes[code], counts.reported_pairs)))
        if description.comparisons == 0:
            continue
        for label, value in (("average length", description.average_length),
                             ("average # {0} exons".format(labels.reference), description.average_refr_exons),
                             ("average # {0} exons".format(labels.prediction), description.average_pred_exons),
                             ("average {0} CDS length (aa)".format(labels.reference),
                              description.average_refr_cds_length),
                             ("average {0} CDS length (aa)".format(labels.prediction),
                              description.average_pred_cds_length)):
            lines.append("      {0:.<36}{1:<10}".format(label, format_ratio(value, precision=2)))
    lines.extend([
        "    {0} transcripts (or sets) without match..{1}".format(labels.reference, counts.unique_refr_cliques),
        "    novel {0} transcripts (or sets)..........{1}".format(labels.prediction, counts.novel_pred_cliques),
        ""])

    stats = summary.stats
    for name, units, struc in (("CDS", "CDS segments", stats.cds_struc), ("Exon", "exons", stats.exon_struc),
                               ("UTR", "UTR segments", stats.utr_struc)):
        lines.extend(["  {0} structure comparison".format(name),
                      "    {0} {1}: {2}".format(labels.reference, units, struc.reference_units),
                      "      match {0}: {1} ({2})".format(labels.prediction, struc.correct,
                                                         _percentage(struc.correct, struc.reference_units)),
                      "      don't match {0}: {1} ({2})".format(labels.prediction, struc.missing,
                                                               _percentage(struc.missing, struc.reference_units)),
                      "    {0} {1}: {2}".format(labels.prediction, units, struc.prediction_units),
                      "      match {0}: {1} ({2})".format(labels.reference, struc.correct,
                                                         _percentage(struc.correct, struc.prediction_units)),
                      "      don't match {0}: {1} ({2})".format(labels.reference, struc.wrong,
                                                               _percentage(struc.wrong, struc.prediction_units)),
                      "    {0:<30}{1}".format("Sensitivity:", format_ratio(struc.sensitivity)),
                      "    {0:<30}{1}".format("Specificity:", format_ratio(struc.specificity)),
                      "    {0:<30}{1}".format("F1 Score:", format_ratio(struc.f1)),
                      "    {0:<30}{1}".format("Annotation edit distance:", format_ratio(struc.edit_distance)),
                      ""])

    lines.extend([line.replace("     |    ", "  ", 1) for line in nucleotide_lines(stats)])
    print(*lines, sep="\n", file=out)


def print_loci(run, out):
    """
    Print the loci of a single-annotation clustering run as GFF3.
    :param run: the clustering run, whose loci are Locus objects.
    :param out: output handle.
    """

    print("##gff-version 3", file=out)
    for counter, locus in enumerate(run.sorted_loci(), start=1):
        genes = locus.reference_genes
        attributes = "ID=locus{0};gene_count={1};genes={2}".format(
            counter, len(genes), ",".join(gene.id for gene in genes))
        if locus.notes:
            attributes += ";warnings={0}".format(len(locus.notes))
        print(locus.chrom, "Locompare", "locus", locus.start, locus.end, ".", ".", ".", attributes,
              sep="\t", file=out)
