import itertools
import unittest
from functools import cmp_to_key
from unittest import mock

from Locompare import create_default_logger
from Locompare.configuration import CompareConfiguration
from Locompare.exceptions import DegenerateRatio, ModelVectorOverflow
from Locompare.loci import Locus
from Locompare.scales import ClassCode, CliquePair, TranscriptClique, build_cliques, compare_locus
from Locompare.scales.clique_pair import compare_pairs, compare_pairs_reverse
from Locompare.scales.comparison import UNDEFINED, NucleotideStats, StructureStats, format_ratio
from Locompare.scales.model_vector import MAX_EXONS, ModelVector
from Locompare.scales.selector import select_pairs
from Locompare.transcripts import FeatureArena, Gene, Transcript


def make_transcript(tid, exons, cds=(), strand="+", chrom="chr1"):
    transcript = Transcript(tid=tid, chrom=chrom, strand=strand, parent="{0}.gene".format(tid))
    transcript.add_exons(exons)
    transcript.add_exons(cds, feature="CDS")
    transcript.finalize()
    return transcript


def make_locus(reference=(), prediction=()):
    arena = FeatureArena()
    transcripts = list(reference) + list(prediction)
    locus = Locus(transcripts[0].chrom, min(_.start for _ in transcripts), max(_.end for _ in transcripts), arena)
    for source, group in (("reference", reference), ("prediction", prediction)):
        for transcript in group:
            locus.add(arena.add(Gene(transcript, source=source)), source)
    return locus


def compared(refr, pred):
    transcripts = list(refr) + list(pred)
    pair = CliquePair(TranscriptClique(refr), TranscriptClique(pred),
                      min(_.start for _ in transcripts), max(_.end for _ in transcripts))
    pair.comparative_analysis()
    return pair


class TestStatistics(unittest.TestCase):

    def test_structure_ratios(self):
        stats = StructureStats(correct=3, missing=1, wrong=2)
        self.assertEqual(stats.reference_units, 4)
        self.assertEqual(stats.prediction_units, 5)
        self.assertAlmostEqual(stats.sensitivity, 0.75)
        self.assertAlmostEqual(stats.specificity, 0.6)
        harmonic = 2 * stats.sensitivity * stats.specificity / (stats.sensitivity + stats.specificity)
        self.assertAlmostEqual(stats.f1, harmonic)
        self.assertAlmostEqual(stats.edit_distance, 1 - harmonic)

    def test_undefined_ratios(self):
        stats = StructureStats()
        self.assertTrue(stats.is_empty)
        self.assertTrue(stats.is_perfect)
        for value in (stats.sensitivity, stats.specificity, stats.f1, stats.edit_distance):
            with self.subTest(value=value):
                self.assertIs(value, UNDEFINED)
                self.assertFalse(value)
                with self.assertRaises(DegenerateRatio):
                    float(value)
        self.assertEqual(format_ratio(stats.f1), "--")
        self.assertEqual(str(UNDEFINED), "--")
        # Undefined is not zero
        self.assertIsNot(StructureStats(correct=0, missing=2).sensitivity, UNDEFINED)
        self.assertEqual(StructureStats(correct=0, missing=2).sensitivity, 0)

    def test_invalid_counts(self):
        for counts in ((-1, 0, 0), (0, 1.5, 0), (True, 0, 0)):
            with self.subTest(counts=counts), self.assertRaises(ValueError):
                StructureStats(*counts)

    def test_structure_compare(self):
        stats = StructureStats.compare([(1, 10), (20, 30), (40, 50)], [(1, 10), (20, 31)])
        self.assertEqual(stats, StructureStats(1, 2, 1))
        total = stats + StructureStats(1, 0, 0)
        self.assertEqual(total, StructureStats(2, 2, 1))
        self.assertEqual(stats, StructureStats(1, 2, 1))

    def test_nucleotide_ratios(self):
        stats = NucleotideStats(tp=40, fp=10, fn=10, tn=40)
        self.assertAlmostEqual(stats.matching_coefficient, 0.8)
        self.assertAlmostEqual(stats.correlation_coefficient, 0.6)
        self.assertAlmostEqual(stats.sensitivity, 0.8)
        self.assertAlmostEqual(stats.specificity, 0.8)
        self.assertAlmostEqual(stats.f1, 0.8)
        # All positions coding: the correlation is undefined
        self.assertIs(NucleotideStats(tp=10).correlation_coefficient, UNDEFINED)
        self.assertIs(NucleotideStats(tn=10).sensitivity, UNDEFINED)
        self.assertEqual(NucleotideStats(tn=10).matching_coefficient, 1)


class TestCliques(unittest.TestCase):

    def test_build_cliques(self):
        first = make_transcript("A", [(100, 200)])
        second = make_transcript("B", [(300, 400)])
        third = make_transcript("C", [(150, 350)])
        cliques = build_cliques([third, second, first])
        self.assertEqual([clique.ids for clique in cliques], [("A",), ("C",), ("B",), ("A", "B")])

    def test_trivial_cliques(self):
        self.assertEqual(build_cliques([]), [])
        transcript = make_transcript("A", [(100, 200)])
        self.assertEqual(build_cliques([transcript]), [TranscriptClique([transcript])])

    def test_duplicated_ids(self):
        with self.assertRaises(ValueError):
            build_cliques([make_transcript("A", [(100, 200)]), make_transcript("A", [(300, 400)])])

    def test_cliques_are_compatible(self):
        transcripts = [make_transcript("t{0}".format(num), [(start, start + 60)])
                       for num, start in enumerate(range(100, 700, 50))]
        for clique in build_cliques(transcripts):
            for transcript, other in itertools.combinations(clique, 2):
                self.assertFalse(transcript.exon_overlap(other))

    def test_empty_clique(self):
        clique = TranscriptClique.empty()
        self.assertTrue(clique.is_empty)
        self.assertEqual(clique.id, "None")
        self.assertEqual(len(clique), 0)
        self.assertFalse(clique.has_utrs)


class TestModelVector(unittest.TestCase):

    def test_coding_vector(self):
        transcript = make_transcript("gene1.1", [(100, 200), (300, 500)], cds=[(120, 200), (300, 480)])
        vector = ModelVector(TranscriptClique([transcript]), 90, 510)
        self.assertEqual(len(vector), 421)
        self.assertEqual(vector.units(), [("G", 90, 99), ("F", 100, 119), ("C", 120, 200), ("I", 201, 299),
                                          ("C", 300, 480), ("T", 481, 500), ("G", 501, 510)])
        self.assertEqual(str(vector)[:12], "GGGGGGGGGGFF")

    def test_minus_strand_and_noncoding(self):
        coding = make_transcript("minus", [(100, 200)], cds=[(150, 180)], strand="-")
        noncoding = make_transcript("nc", [(300, 310)])
        vector = ModelVector(TranscriptClique([coding, noncoding]), 100, 310)
        self.assertEqual(vector.units(), [("T", 100, 149), ("C", 150, 180), ("F", 181, 200),
                                          ("G", 201, 299), ("N", 300, 310)])

    def test_empty_clique(self):
        vector = ModelVector(TranscriptClique.empty(), 1, 10)
        self.assertEqual(str(vector), "G" * 10)

    def test_one_byte_per_base(self):
        transcript = make_transcript("gene1.1", [(100, 200), (300, 500)], cds=[(120, 200), (300, 480)])
        vector = ModelVector(TranscriptClique([transcript]), 100, 500)
        self.assertEqual(vector.vector.itemsize, 1)
        self.assertEqual(vector.vector.nbytes, len(vector))
        self.assertEqual(int(vector.mask("C").sum()), 262)

    def test_overflow(self):
        exons = [(num * 10 + 1, num * 10 + 5) for num in range(MAX_EXONS + 1)]
        transcript = make_transcript("large", exons)
        with self.assertRaises(ModelVectorOverflow):
            ModelVector(TranscriptClique([transcript]), 1, transcript.end)

    def test_out_of_range(self):
        transcript = make_transcript("A", [(100, 200)])
        with self.assertRaises(ValueError):
            ModelVector(TranscriptClique([transcript]), 150, 300)


class TestClassification(unittest.TestCase):

    def test_perfect_match(self):
        refr = make_transcript("gene1.1", [(100, 200), (300, 500)], cds=[(120, 200), (300, 480)])
        pred = make_transcript("pred1.1", [(100, 200), (300, 500)], cds=[(120, 200), (300, 480)])
        pair = compared([refr], [pred])
        self.assertEqual(pair.classification, ClassCode.PERFECT_MATCH)
        self.assertEqual(pair.stats.exon_struc, StructureStats(2, 0, 0))
        self.assertEqual(pair.stats.cds_struc, StructureStats(2, 0, 0))
        self.assertEqual(pair.stats.overall_identity, 1.0)
        self.assertTrue(pair.stats.is_identical)

    def test_mislabeled(self):
        refr = make_transcript("refr", [(100, 479)], cds=[(120, 479)], strand="+")
        pred = make_transcript("pred", [(100, 479)], cds=[(120, 479)], strand="-")
        pair = compared([refr], [pred])
        self.assertEqual(pair.classification, ClassCode.MISLABELED)
        self.assertTrue(pair.stats.cds_struc.is_perfect)
        self.assertTrue(pair.stats.exon_struc.is_perfect)
        self.assertFalse(pair.stats.utr_struc.is_perfect)
        self.assertAlmostEqual(pair.stats.overall_identity, 360 / 380)

    def test_other_codes(self):
        refr = make_transcript("refr", [(100, 200), (300, 500)], cds=[(150, 200), (300, 400)])
        scenarios = [
            (make_transcript("cds", [(100, 200), (300, 600)], cds=[(150, 200), (300, 400)]), ClassCode.CDS_MATCH),
            (make_transcript("exon", [(100, 200), (300, 500)], cds=[(160, 200), (300, 400)]), ClassCode.EXON_MATCH),
            (make_transcript("utr", [(100, 250), (300, 500)], cds=[(150, 250), (300, 400)]), ClassCode.UTR_MATCH),
            (make_transcript("non", [(120, 320)], cds=[(170, 270)]), ClassCode.NON_MATCH),
        ]
        for pred, code in scenarios:
            with self.subTest(code=code):
                pair = compared([refr], [pred])
                self.assertEqual(pair.classification, code)

    def test_classification_is_consistent(self):
        refr = make_transcript("refr", [(100, 200), (300, 500)], cds=[(150, 200), (300, 400)])
        predictions = [
            make_transcript("p1", [(100, 200), (300, 500)], cds=[(150, 200), (300, 400)]),
            make_transcript("p2", [(100, 200), (300, 600)], cds=[(150, 200), (300, 400)]),
            make_transcript("p3", [(90, 200), (300, 500)], cds=[(150, 200), (300, 450)]),
            make_transcript("p4", [(100, 500)]),
        ]
        for pred in predictions:
            pair = compared([refr], [pred])
            with self.subTest(pred=pred.id):
                stats = pair.stats
                if pair.classification == ClassCode.PERFECT_MATCH:
                    self.assertTrue(stats.is_identical)
                if pair.classification in (ClassCode.PERFECT_MATCH, ClassCode.MISLABELED, ClassCode.CDS_MATCH):
                    self.assertTrue(stats.cds_struc.is_perfect)
                elif pair.classification == ClassCode.EXON_MATCH:
                    self.assertTrue(stats.exon_struc.is_perfect)
                    self.assertFalse(stats.cds_struc.is_perfect)
                elif pair.classification == ClassCode.NON_MATCH:
                    self.assertFalse(any(struc.is_perfect for _, struc in stats.structures))

    def test_codes(self):
        self.assertEqual([code.label for code in ClassCode],
                         ["perfect match", "mislabeled", "cds match", "exon match", "utr match", "non match"])
        self.assertEqual(str(ClassCode.EXON_MATCH), "exon match")
        self.assertTrue(all(code.definition for code in ClassCode))
        self.assertLess(ClassCode.PERFECT_MATCH, ClassCode.NON_MATCH)

    def test_ordering(self):
        refr = make_transcript("refr", [(100, 479)], cds=[(120, 479)], strand="+")
        perfect = compared([refr], [make_transcript("good", [(100, 479)], cds=[(120, 479)], strand="+")])
        mislabeled = compared([refr], [make_transcript("bad", [(100, 479)], cds=[(120, 479)], strand="-")])
        self.assertEqual(compare_pairs(perfect, mislabeled), 1)
        self.assertEqual(compare_pairs(mislabeled, perfect), -1)
        self.assertEqual(compare_pairs(perfect, perfect), 0)

    def test_reverse_ordering(self):
        refr = make_transcript("refr", [(100, 200), (300, 479)], cds=[(120, 200), (300, 479)])
        perfect = compared([refr], [make_transcript("good", [(100, 200), (300, 479)], cds=[(120, 200), (300, 479)])])
        exon = compared([refr], [make_transcript("exon", [(100, 200), (300, 479)], cds=[(150, 200), (300, 479)])])
        non = compared([refr], [make_transcript("non", [(110, 210), (320, 479)])])
        self.assertEqual(compare_pairs_reverse(perfect, exon), -1)
        self.assertEqual(compare_pairs_reverse(non, exon), 1)
        ranked = sorted([non, perfect, exon], key=cmp_to_key(compare_pairs_reverse))
        self.assertEqual([pair.pred_clique.id for pair in ranked], ["good", "exon", "non"])
        self.assertEqual(ranked[0].classification, ClassCode.PERFECT_MATCH)

    def test_fewer_transcripts_preferred(self):
        first = make_transcript("A", [(100, 200)])
        second = make_transcript("B", [(300, 400)])
        other = make_transcript("X", [(100, 200)])
        single = CliquePair(TranscriptClique([first]), TranscriptClique([other]), 100, 200)
        double = CliquePair(TranscriptClique([first]), TranscriptClique([other]), 100, 200)
        single.comparative_analysis()
        double.comparative_analysis()
        double.refr_clique = TranscriptClique([first, second])
        self.assertEqual(compare_pairs(single, double), 1)

    def test_empty_cliques(self):
        transcript = make_transcript("A", [(100, 200)])
        with self.assertRaises(ValueError):
            CliquePair(TranscriptClique.empty(), TranscriptClique.empty(), 100, 200).comparative_analysis()
        pair = CliquePair(TranscriptClique([transcript]), TranscriptClique.empty(), 100, 200)
        pair.comparative_analysis()
        self.assertIsNone(pair.classification)
        self.assertEqual(pair.stats.exon_struc, StructureStats(0, 1, 0))
        with self.assertRaises(ValueError):
            pair.classify()


class TestLocusComparison(unittest.TestCase):

    def test_fast_path(self):
        locus = make_locus([make_transcript("refr", [(100, 200)])], [make_transcript("pred", [(100, 200)])])
        with mock.patch("Locompare.scales.locus_comparison.build_cliques") as patched:
            result = compare_locus(locus)
        patched.assert_not_called()
        self.assertEqual(len(result.pairs), 1)
        self.assertEqual(result.pairs[0].classification, ClassCode.PERFECT_MATCH)
        self.assertEqual(result.category, "shared")

    def test_vectors_kept_on_request(self):
        refr, pred = make_transcript("refr", [(100, 200)]), make_transcript("pred", [(100, 200)])
        result = compare_locus(make_locus([refr], [pred]))
        self.assertIsNone(result.pairs[0].refr_vector)
        self.assertIsNone(result.pairs[0].pred_vector)
        result = compare_locus(make_locus([refr], [pred]), configuration=CompareConfiguration(model_vectors=True))
        self.assertEqual(str(result.pairs[0].refr_vector), "N" * 101)
        self.assertEqual(str(result.pairs[0].pred_vector), "N" * 101)

    def test_clique_path(self):
        locus = make_locus([make_transcript("r1", [(100, 200)]), make_transcript("r2", [(150, 250)])],
                           [make_transcript("pred", [(100, 200)])])
        with mock.patch("Locompare.scales.locus_comparison.build_cliques", wraps=build_cliques) as patched:
            result = compare_locus(locus)
        self.assertEqual(patched.call_count, 2)
        self.assertEqual(result.comparisons, 2)
        self.assertEqual([pair.refr_clique.ids for pair in result.pairs], [("r1",)])
        self.assertEqual([clique.ids for clique in result.unique_refr], [("r2",)])

    def test_comparison_limit(self):
        logger = create_default_logger("test_comparison_limit")
        refr = [make_transcript("r{0}".format(num), [(100 + num, 200 + num)]) for num in range(5)]
        pred = [make_transcript("p{0}".format(num), [(100 + num, 200 + num)]) for num in range(5)]
        locus = make_locus(refr, pred)
        with self.assertLogs(logger, level="WARNING"):
            result = compare_locus(locus, configuration=CompareConfiguration(max_comparisons=10), logger=logger)
        self.assertTrue(result.exceeds_comparison_limit)
        self.assertTrue(result.skipped)
        self.assertEqual(result.pair_count, 25)
        self.assertEqual(result.pairs, [])
        self.assertEqual(result.comparisons, 0)

        # The same locus is fully compared with the default limit
        result = compare_locus(make_locus(refr, pred))
        self.assertEqual(result.comparisons, 25)
        self.assertEqual(len(result.pairs), 5)
        self.assertTrue(all(pair.classification == ClassCode.PERFECT_MATCH for pair in result.pairs))

    def test_transcript_limit(self):
        refr = [make_transcript("r{0}".format(num), [(100 + num, 200 + num)]) for num in range(4)]
        pred = [make_transcript("p0", [(100, 200)])]
        result = compare_locus(make_locus(refr, pred), configuration=CompareConfiguration(max_transcripts=3))
        self.assertTrue(result.skipped)
        self.assertFalse(result.exceeds_comparison_limit)
        self.assertEqual(result.refr_cliques, [])

    def test_overflow_is_skipped(self):
        logger = create_default_logger("test_overflow_is_skipped")
        exons = [(num * 10 + 1, num * 10 + 5) for num in range(MAX_EXONS + 1)]
        locus = make_locus([make_transcript("large", exons)], [make_transcript("pred", [(1, 5)])])
        with self.assertLogs(logger, level="ERROR"):
            result = compare_locus(locus, logger=logger)
        self.assertEqual(result.pairs, [])
        self.assertTrue(result.degraded)
        self.assertEqual(len(result.notes), 1)

    def test_one_sided_loci(self):
        result = compare_locus(make_locus(prediction=[make_transcript("p1", [(100, 200)]),
                                                      make_transcript("p2", [(300, 400)])]))
        self.assertEqual(result.category, "unique_pred")
        self.assertEqual(result.pairs, [])
        self.assertEqual([clique.ids for clique in result.novel_pred], [("p1", "p2")])
        result = compare_locus(make_locus(reference=[make_transcript("r1", [(100, 200)])]))
        self.assertEqual(result.category, "unique_refr")
        self.assertEqual([clique.ids for clique in result.unique_refr], [("r1",)])


class TestSelector(unittest.TestCase):

    def test_selection(self):
        refr = [make_transcript("A", [(100, 200)]), make_transcript("B", [(300, 400)])]
        pred = [make_transcript("pa", [(100, 200)]), make_transcript("pb", [(300, 400)]),
                make_transcript("X", [(120, 180)])]
        result = compare_locus(make_locus(refr, pred))
        self.assertEqual(len(result.refr_cliques), 3)
        self.assertEqual(len(result.pred_cliques), 5)
        self.assertEqual(result.comparisons, 15)
        self.assertEqual([(pair.refr_clique.ids, pair.pred_clique.ids) for pair in result.pairs],
                         [(("A", "B"), ("pa", "pb"))])
        self.assertEqual(result.pairs[0].classification, ClassCode.PERFECT_MATCH)
        self.assertEqual(result.unique_refr, [])
        self.assertEqual([clique.ids for clique in result.novel_pred], [("X",)])

    def test_exclusivity(self):
        refr = [make_transcript("r{0}".format(num), [(start, start + 80)])
                for num, start in enumerate((100, 150, 300, 350, 600))]
        pred = [make_transcript("p{0}".format(num), [(start, start + 70)])
                for num, start in enumerate((110, 320, 330, 610, 900))]
        with mock.patch("Locompare.scales.locus_comparison.select_pairs", wraps=select_pairs) as patched:
            result = compare_locus(make_locus(refr, pred))
        candidates = patched.call_args[0][0]
        self.assertEqual(len(candidates), result.comparisons)
        for pair in candidates:
            for struc in (pair.stats.cds_struc, pair.stats.exon_struc, pair.stats.utr_struc,
                          pair.stats.cds_nuc, pair.stats.utr_nuc):
                for value in (struc.sensitivity, struc.specificity, struc.f1, struc.edit_distance):
                    if value is not UNDEFINED:
                        self.assertGreaterEqual(value, 0, pair)
                        self.assertLessEqual(value, 1, pair)
            self.assertLessEqual(pair.stats.overall_identity, 1)
        seen_refr, seen_pred = [], []
        for pair in result.pairs:
            seen_refr.extend(pair.refr_clique.ids)
            seen_pred.extend(pair.pred_clique.ids)
        for clique in result.unique_refr:
            seen_refr.extend(clique.ids)
        for clique in result.novel_pred:
            seen_pred.extend(clique.ids)
        self.assertEqual(len(seen_refr), len(set(seen_refr)))
        self.assertEqual(len(seen_pred), len(set(seen_pred)))
        self.assertEqual(sorted(seen_refr), sorted(_.id for _ in refr))
        self.assertEqual(sorted(seen_pred), sorted(_.id for _ in pred))

    def test_empty_pairs_are_not_selected(self):
        transcript = make_transcript("A", [(100, 200)])
        pair = CliquePair(TranscriptClique([transcript]), TranscriptClique.empty(), 100, 200)
        pair.comparative_analysis()
        selected, unique, novel = select_pairs([pair], [TranscriptClique([transcript])], [])
        self.assertEqual(selected, [])
        self.assertEqual([_.ids for _ in unique], [("A",)])
        self.assertEqual(novel, [])


if __name__ == '__main__':
    unittest.main()
