import dataclasses
import unittest
from unittest.mock import patch
from app.core.config import settings
from app.schemas import ParsingConfig, ResponseQuality
from app.services.ai_engine.media_vocabulary import BOOK_KIND, MOVIE_KIND, ExtractorVocabulary
from app.services.ai_engine.response_analysis import (
    analyze_response,
    determine_status,
    detect_content_type,
    get_confidence_level,
    get_confidence_range,
    get_ui_action_types,
    validate_ai_content,
    validate_confidence_score,
)
from app.services.ai_engine.response_parser import AIResponseParser

BOOK_LIST = """
Great books to read:
• "The Hobbit" by J.R.R. Tolkien
• "Brave New World" by Aldous Huxley
• The Catcher in the Rye by J.D. Salinger
"""


def quality(item_count, average_confidence):
    return ResponseQuality(
        has_structured_data=False,
        has_metadata=False,
        content_length=10,
        item_count=item_count,
        average_confidence=average_confidence,
    )


class TestConfidenceHelpers(unittest.TestCase):
    def test_levels(self):
        self.assertEqual(get_confidence_level(1.0), "high")
        self.assertEqual(get_confidence_level(0.8), "high")
        self.assertEqual(get_confidence_level(0.79), "medium")
        self.assertEqual(get_confidence_level(0.5), "medium")
        self.assertEqual(get_confidence_level(0.49), "low")
        self.assertEqual(get_confidence_level(0.0), "low")

    def test_ranges(self):
        self.assertEqual(get_confidence_range("high"), (0.8, 1.0))
        self.assertEqual(get_confidence_range("low"), (0.0, 0.49))

    def test_score_validation(self):
        self.assertTrue(validate_confidence_score(0.0))
        self.assertTrue(validate_confidence_score(1.0))
        self.assertFalse(validate_confidence_score(1.1))
        self.assertFalse(validate_confidence_score(-0.1))
        self.assertFalse(validate_confidence_score(float("nan")))


class TestContentValidation(unittest.TestCase):
    def test_blank_content_is_invalid(self):
        self.assertFalse(validate_ai_content(""))
        self.assertFalse(validate_ai_content("   \n"))
        self.assertFalse(validate_ai_content(None))

    def test_length_limit(self):
        self.assertTrue(validate_ai_content("hello", max_chars=5))
        self.assertFalse(validate_ai_content("hello!", max_chars=5))
        with patch.object(settings, "ai_parse_max_content_chars", 3):
            self.assertFalse(validate_ai_content("hello"))

    def test_ui_actions(self):
        self.assertEqual(get_ui_action_types(True, True), ["add_to_readlist", "add_to_watchlist"])
        self.assertEqual(get_ui_action_types(False, True), ["add_to_watchlist"])
        self.assertEqual(get_ui_action_types(False, False), [])


class TestContentType(unittest.TestCase):
    def test_detection(self):
        self.assertEqual(detect_content_type(""), "unknown")
        self.assertEqual(detect_content_type(None), "unknown")
        self.assertEqual(detect_content_type("- one\n* two\n3. three"), "structured_list")
        self.assertEqual(detect_content_type("Just a paragraph.\nAnd another."), "narrative_text")
        self.assertEqual(detect_content_type(BOOK_LIST), "mixed_content")


class TestStatus(unittest.TestCase):
    def test_status_rules(self):
        self.assertEqual(determine_status("", quality(0, 0.0), 0), "no_content")
        self.assertEqual(determine_status("text", quality(0, 0.0), 0), "failed")
        self.assertEqual(determine_status("text", quality(2, 0.9), 1), "partial")
        self.assertEqual(determine_status("text", quality(2, 0.4), 0), "partial")
        self.assertEqual(determine_status("text", quality(2, 0.5), 0), "success")


class TestAnalyzeResponse(unittest.TestCase):
    def test_no_content(self):
        result = analyze_response(None)
        self.assertEqual(result.status, "no_content")
        self.assertEqual(result.content_type, "unknown")
        self.assertEqual(result.quality.content_length, 0)
        self.assertFalse(result.has_books)

    def test_nothing_found(self):
        result = analyze_response("I like the book. The movie was good too.")
        self.assertEqual(result.status, "failed")
        self.assertEqual(result.content_type, "narrative_text")
        self.assertEqual(result.quality.item_count, 0)
        self.assertEqual(result.quality.average_confidence, 0.0)

    def test_structured_list(self):
        result = analyze_response(BOOK_LIST)
        self.assertEqual(result.status, "success")
        self.assertEqual(result.content_type, "mixed_content")
        self.assertEqual(len(result.books), 3)
        self.assertTrue(result.quality.has_structured_data)
        self.assertTrue(result.quality.has_metadata)
        self.assertEqual(result.quality.item_count, 3)
        self.assertAlmostEqual(result.quality.average_confidence, 0.767)
        self.assertEqual(result.warnings, [])
        self.assertGreaterEqual(result.processing_time, 0.0)

    def test_default_config_comes_from_settings(self):
        config = ParsingConfig()
        self.assertEqual(config.min_confidence, settings.ai_parse_min_confidence)
        self.assertEqual(config.max_items, settings.ai_parse_max_items)
        with patch.object(settings, "ai_parse_max_items", 5):
            self.assertEqual(ParsingConfig().max_items, 5)
        self.assertEqual(analyze_response(BOOK_LIST).config, ParsingConfig())

    def test_min_confidence_drops_items(self):
        result = analyze_response(BOOK_LIST, ParsingConfig(min_confidence=0.75))
        self.assertEqual([book.title for book in result.books], ["The Hobbit", "Brave New World"])
        self.assertEqual(result.status, "partial")
        self.assertEqual(result.warnings, ["1 books below confidence 0.75 were dropped"])

    def test_max_items_truncates(self):
        result = analyze_response(BOOK_LIST, ParsingConfig(max_items=2))
        self.assertEqual(len(result.books), 2)
        self.assertEqual(result.books[0].title, "The Hobbit")
        self.assertEqual(result.status, "partial")
        self.assertEqual(result.warnings, ["1 books over the limit of 2 were dropped"])

    def test_genres_can_be_disabled(self):
        content = '"Dune" by Frank Herbert is a science fiction fantasy novel.'
        self.assertTrue(analyze_response(content).books[0].genre)
        result = analyze_response(content, ParsingConfig(extract_genres=False))
        self.assertEqual(result.books[0].genre, [])

    def test_low_average_confidence_is_partial(self):
        result = analyze_response('"A" by Bo', ParsingConfig(min_confidence=0.0))
        self.assertEqual(len(result.books), 1)
        self.assertLess(result.quality.average_confidence, 0.5)
        self.assertEqual(result.status, "partial")
        self.assertEqual(result.warnings, [])

    def test_custom_parser(self):
        content = 'Check out the book called "Sapiens".'
        self.assertEqual(analyze_response(content).status, "success")
        vocabulary = ExtractorVocabulary(book=dataclasses.replace(BOOK_KIND, mention_verbs=("tome",)), movie=MOVIE_KIND)
        result = analyze_response(content, parser=AIResponseParser(vocabulary))
        self.assertEqual(result.status, "failed")


if __name__ == "__main__":
    unittest.main()
