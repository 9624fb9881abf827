import unittest

from positive_news.config import MatchConfig
from positive_news.dedupe import ArchiveIndex, ArchiveMatcher, dedupe_batch, normalize_title, significant_words
from positive_news.models import ArchiveEntry

from .helpers import make_candidate

CORAL_FIRST = "Coral Reef Shows Record Recovery After Bleaching Event"
CORAL_SECOND = "Scientists Achieve Coral Reef Recovery Record After Bleaching"


def _matcher(*entries, config=None):
    return ArchiveMatcher(ArchiveIndex.build(entries, config))


class TestNormalizeTitle(unittest.TestCase):
    def test_strips_punctuation_and_collapses_spaces(self):
        self.assertEqual(normalize_title("  Hello,   World!\tIt's  GREAT "), "hello world its great")

    def test_truncates_to_prefix(self):
        self.assertEqual(len(normalize_title("word " * 40)), 80)
        self.assertEqual(normalize_title("abcdef", prefix_length=3), "abc")

    def test_none_is_empty(self):
        self.assertEqual(normalize_title(None), "")

    def test_significant_words_skip_short_words(self):
        self.assertEqual(significant_words("the big reef is back"), frozenset({"reef", "back"}))


class TestDedupeBatch(unittest.TestCase):
    def test_first_occurrence_wins(self):
        first = make_candidate(title="Solar Record", source_name="A")
        second = make_candidate(title="SOLAR RECORD", source_name="B")
        third = make_candidate(title="Wind Record", source_name="C")
        self.assertEqual(dedupe_batch([first, second, third]), [first, third])

    def test_prefix_key(self):
        prefix = "x" * 50
        first = make_candidate(title=prefix + " one")
        second = make_candidate(title=prefix + " two")
        self.assertEqual(dedupe_batch([first, second]), [first])

    def test_titles_differing_inside_prefix_are_kept(self):
        items = [make_candidate(title="Otters return"), make_candidate(title="Beavers return")]
        self.assertEqual(dedupe_batch(items), items)

    def test_reworded_wire_story_collapses(self):
        first = make_candidate(title=CORAL_FIRST, source_name="Science Daily Environment")
        second = make_candidate(title=CORAL_SECOND, source_name="The Guardian Environment")
        self.assertEqual(dedupe_batch([first, second]), [first])

    def test_prefix_only_mode(self):
        first = make_candidate(title=CORAL_FIRST)
        second = make_candidate(title=CORAL_SECOND)
        config = MatchConfig(batch_fuzzy=False)
        self.assertEqual(dedupe_batch([first, second], config), [first, second])

    def test_empty_titles_share_a_key(self):
        first = make_candidate(title="", link="https://example.com/1")
        second = make_candidate(title="", link="https://example.com/2")
        self.assertEqual(dedupe_batch([first, second]), [first])

    def test_idempotent(self):
        items = [
            make_candidate(title=CORAL_FIRST),
            make_candidate(title="Otters return to the Thames"),
            make_candidate(title=CORAL_SECOND),
            make_candidate(title="otters return to the thames"),
            make_candidate(title="Solar farms power villages"),
        ]
        once = dedupe_batch(items)
        self.assertEqual(dedupe_batch(once), once)
        self.assertEqual(len(once), 3)

    def test_empty_input(self):
        self.assertEqual(dedupe_batch([]), [])


class TestArchiveMatcher(unittest.TestCase):
    def test_empty_archive_never_matches(self):
        matcher = _matcher()
        self.assertFalse(matcher.is_published(make_candidate(title=CORAL_FIRST, link="https://example.com/a")))
        self.assertFalse(matcher.is_published(make_candidate()))

    def test_url_match_ignores_title(self):
        matcher = _matcher(ArchiveEntry(headline="Great Barrier Reef Bounces Back", source_url="https://example.com/reef"))
        candidate = make_candidate(title="Completely unrelated headline", link="https://example.com/reef")
        self.assertTrue(matcher.is_published(candidate))
        self.assertEqual(matcher.match_reason(candidate), "url")

    def test_empty_link_does_not_match_empty_url(self):
        matcher = _matcher(ArchiveEntry(headline="Great Barrier Reef Bounces Back", source_url=""))
        self.assertFalse(matcher.is_published(make_candidate(title="Otters return", link="")))

    def test_exact_normalized_title(self):
        matcher = _matcher(ArchiveEntry(headline="Otters Return -- to the Thames!", source_url="https://a.example"))
        candidate = make_candidate(title="otters return to the thames", link="https://b.example")
        self.assertEqual(matcher.match_reason(candidate), "title")

    def test_fuzzy_three_of_four_words(self):
        matcher = _matcher(ArchiveEntry(headline="Solar farms power villages"))
        candidate = make_candidate(title="Solar Farms Power Schools")
        self.assertEqual(matcher.match_reason(candidate), "fuzzy")

    def test_fuzzy_two_of_four_words(self):
        matcher = _matcher(ArchiveEntry(headline="Solar farms power villages"))
        self.assertFalse(matcher.is_published(make_candidate(title="Solar farms light schools")))

    def test_fuzzy_needs_four_significant_words(self):
        matcher = _matcher(ArchiveEntry(headline="Solar farms power"))
        self.assertFalse(matcher.is_published(make_candidate(title="Solar farms power the town")))

    def test_fuzzy_scans_whole_archive(self):
        matcher = _matcher(
            ArchiveEntry(headline="Beavers build dams across Scotland"),
            ArchiveEntry(headline="Wolves return after century away"),
            ArchiveEntry(headline="Solar farms power villages"),
        )
        self.assertTrue(matcher.is_published(make_candidate(title="Solar farms power schools")))

    def test_threshold_is_configurable(self):
        config = MatchConfig(overlap_threshold=0.8)
        matcher = _matcher(ArchiveEntry(headline="Solar farms power villages"), config=config)
        self.assertFalse(matcher.is_published(make_candidate(title="Solar farms power schools")))

    def test_rewritten_headline_does_not_match_original_title(self):
        matcher = _matcher(ArchiveEntry(headline="Great Barrier Reef Bounces Back", source_url="https://example.com/reef"))
        candidate = make_candidate(title=CORAL_FIRST, link="https://other.example/coral")
        self.assertFalse(matcher.is_published(candidate))

    def test_archived_original_title_matches(self):
        matcher = _matcher(
            ArchiveEntry(
                headline="Great Barrier Reef Bounces Back",
                source_url="https://example.com/reef",
                original_title=CORAL_FIRST,
            )
        )
        candidate = make_candidate(title=CORAL_SECOND, link="https://other.example/coral")
        self.assertEqual(matcher.match_reason(candidate), "fuzzy")

    def test_index_size(self):
        index = ArchiveIndex.build([ArchiveEntry(headline="One", source_url="https://a.example")])
        self.assertEqual(len(index), 2)


if __name__ == "__main__":
    unittest.main()
