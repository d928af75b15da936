"""
response_parser.py (AI Engine)
- Extract book and movie candidates (title, author/director, genres, confidence) from free-form
  LLM recommendation text.
- One extraction engine, parameterised by the MediaKind descriptors in media_vocabulary.
- Pure and deterministic: no I/O, no shared mutable state, never raises on any input.
"""
from typing import Iterator, List, NamedTuple, Optional, Set
import re

from app.schemas import ParsedMediaItem, ParsedResponse
from app.utils.logger import logger
from .media_vocabulary import DEFAULT_VOCABULARY, ExtractorVocabulary, MediaKind


GENRE_WINDOW = 50

# Straight and typographic double quotes both delimit titles
_QUOTED_TITLE = r'["“]([^"“”]+)["”]'
_SHORT_QUOTED_TITLE = r'["\'“]([^"\'“”\n,]{3,50})["\'”]'

# A name ends at a comma, the word "and", a line end, or a sentence period. A period right after
# a one-letter word is an initial ("F. Scott Fitzgerald", "J.R.R. Tolkien") and does not end it.
_NAME_STOP = r"(?=\s*(?:\band\b|,|(?<!\b[A-Z])\.|$|\n))"

_LIST_ITEM = re.compile(r"(?:^|\n)\s*(?:[-*•]|\d+\.)\s*(.+?)(?=\n|$)", re.MULTILINE)
_LIST_PREFIX = re.compile(r"^(?:read|watch|check out|try)\s+", re.IGNORECASE)

_LIST_QUOTED_BY = re.compile(_QUOTED_TITLE + r"\s+by\s+([^,\n]+)", re.IGNORECASE)
_LIST_QUOTED_DIRECTED_BY = re.compile(_QUOTED_TITLE + r"\s+directed\s+by\s+([^,\n]+)", re.IGNORECASE)
# "X directed by Y" is left to the directed-by pattern
_LIST_BY = re.compile(r"^([^,\n-]+?)(?<!\bdirected)\s+by\s+([^,\n]+)", re.IGNORECASE)
_LIST_DIRECTED_BY = re.compile(r"^([^,\n-]+?)\s+directed\s+by\s+([^,\n]+)", re.IGNORECASE)
_LIST_BARE_TITLE = re.compile(r"^([^,\n-]{3,50})")

_QUOTED_BY = re.compile(_QUOTED_TITLE + r"\s+by\s+([^,\n!?]+?)" + _NAME_STOP, re.IGNORECASE)
_QUOTED_DIRECTED_BY = re.compile(
    _QUOTED_TITLE + r"\s+directed\s+by\s+([^,\n!?]+?)" + _NAME_STOP, re.IGNORECASE
)

# Case-sensitive: titles and names must start with a capital letter
_UNQUOTED_BY = re.compile(
    r"(?:^|\n|\.)\s*([A-ZÀ-ÖØ-Þ](?:[^\W\d_]|[\s':-]){2,50}?)"
    r"\s+by\s+"
    r"([A-ZÀ-ÖØ-Þ](?:[^\W\d_]|[\s.'-]){2,50}?)" + _NAME_STOP,
    re.MULTILINE,
)

_DIRECTOR_POSSESSIVE = re.compile(
    r"([^\W\d_](?:[^\W\d_]|[\s.']){2,30})['’]s\s+(?:film|movie)\s+" + _SHORT_QUOTED_TITLE,
    re.IGNORECASE,
)

_EDGE_QUOTES = re.compile(r"^[\"'“”]|[\"'“”]$")
_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[^\w\s]")


def clean_text(value: Optional[str]) -> str:
    """Trim, strip one layer of surrounding quotes, collapse whitespace."""
    if not value:
        return ""
    value = _EDGE_QUOTES.sub("", value.strip())
    return _WHITESPACE.sub(" ", value).strip()


def normalize_title(title: str) -> str:
    """Deduplication key: lowercase, no punctuation, single spaces."""
    key = _PUNCTUATION.sub("", title.lower())
    return _WHITESPACE.sub(" ", key).strip()


def _capitalize_words(phrase: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in phrase.split(" "))


class _Candidate(NamedTuple):
    title: str
    name: Optional[str]
    genre_context: str
    # Fixed confidence (list items); None means score against the whole text
    confidence: Optional[float] = None
    # Scored candidates are kept only above this; None keeps them all
    min_score: Optional[float] = None


class AIResponseParser:
    """Heuristic extractor for book and movie recommendations in LLM prose.

    Each media kind goes through the same ordered passes: structured list items,
    quoted "Title" by/directed by Name, unquoted Title by Name, contextual quoted
    mentions, and director-possessive mentions. Passes a kind does not support are
    skipped via its MediaKind flags. The first candidate found for a normalized
    title wins; later passes never replace or merge into it.
    """

    def __init__(self, vocabulary: Optional[ExtractorVocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._mention_patterns = {
            kind.media_type: self._compile_mention_pattern(kind) for kind in self.vocabulary.kinds
        }

    @staticmethod
    def _compile_mention_pattern(kind: MediaKind) -> "re.Pattern[str]":
        verbs = "|".join(re.escape(v) for v in kind.mention_verbs)
        return re.compile(
            r"\b(?:" + verbs + r")\s+(?:called\s+|titled\s+)?" + _SHORT_QUOTED_TITLE,
            re.IGNORECASE,
        )

    def parse(self, content: Optional[str]) -> ParsedResponse:
        if not isinstance(content, str) or not content.strip():
            return ParsedResponse.empty()
        try:
            books = self._extract(content, self.vocabulary.book)
            movies = self._extract(content, self.vocabulary.movie)
        except Exception as e:
            logger.exception(f"[AIResponseParser] Extraction failed for content (len={len(content)}): {e}")
            return ParsedResponse.empty()
        return ParsedResponse.from_items(books, movies)

    # ------------------------------------------------------------------
    # Engine
    # ------------------------------------------------------------------

    def _extract(self, content: str, kind: MediaKind) -> List[ParsedMediaItem]:
        items: List[ParsedMediaItem] = []
        seen: Set[str] = set()
        passes = (
            self._list_items(content, kind),
            self._quoted_by(content, kind),
            self._unquoted_by(content, kind),
            self._contextual_mentions(content, kind),
            self._director_possessive(content, kind),
        )
        for candidates in passes:
            for candidate in candidates:
                key = normalize_title(candidate.title)
                if key in seen:
                    continue
                confidence = candidate.confidence
                if confidence is None:
                    confidence = self.score(kind, content, candidate.title, candidate.name)
                    if candidate.min_score is not None and not confidence > candidate.min_score:
                        continue
                items.append(self._build_item(kind, candidate, confidence))
                seen.add(key)

        logger.debug(f"[AIResponseParser] {len(items)} {kind.media_type} candidate(s) from {len(content)} chars")
        return sorted(items, key=lambda item: item.confidence, reverse=True)

    def _build_item(self, kind: MediaKind, candidate: _Candidate, confidence: float) -> ParsedMediaItem:
        fields = {
            "type": kind.media_type,
            "title": candidate.title,
            "genre": self.extract_genres(candidate.genre_context),
            "confidence": confidence,
        }
        if candidate.name:
            fields[kind.name_field] = candidate.name
        return ParsedMediaItem(**fields)

    @staticmethod
    def _window(content: str, match: "re.Match[str]") -> str:
        return content[max(0, match.start() - GENRE_WINDOW): match.end() + GENRE_WINDOW]

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _list_items(self, content: str, kind: MediaKind) -> Iterator[_Candidate]:
        for match in _LIST_ITEM.finditer(content):
            line = match.group(1).strip()
            lowered = line.lower()
            if not any(indicator.lower() in lowered for indicator in kind.indicators):
                continue
            candidate = self._parse_list_item(line, kind)
            if candidate:
                yield candidate

    def _parse_list_item(self, line: str, kind: MediaKind) -> Optional[_Candidate]:
        item = _LIST_PREFIX.sub("", line)

        patterns = [(_LIST_QUOTED_BY, 0.8, False)]
        if kind.directed_by:
            patterns.append((_LIST_QUOTED_DIRECTED_BY, 0.8, False))
        patterns.append((_LIST_BY, 0.7, True))
        if kind.directed_by:
            patterns.append((_LIST_DIRECTED_BY, 0.7, True))

        for pattern, confidence, needs_name in patterns:
            match = pattern.search(item)
            if not match:
                continue
            title = clean_text(match.group(1))
            name = clean_text(match.group(2))
            if title and (name or not needs_name):
                return _Candidate(title, name or None, line, confidence=confidence)

        match = _LIST_BARE_TITLE.search(item)
        if match:
            title = clean_text(match.group(1))
            if len(title) > 2:
                confidence = self.score(kind, line, title)
                if confidence > 0.5:
                    return _Candidate(title, None, line, confidence=confidence)
        return None

    def _quoted_by(self, content: str, kind: MediaKind) -> Iterator[_Candidate]:
        pattern = _QUOTED_DIRECTED_BY if kind.directed_by else _QUOTED_BY
        for match in pattern.finditer(content):
            title = clean_text(match.group(1))
            name = clean_text(match.group(2))
            if title and name:
                yield _Candidate(title, name, self._window(content, match))

    def _unquoted_by(self, content: str, kind: MediaKind) -> Iterator[_Candidate]:
        if not kind.unquoted_by_pass:
            return
        for match in _UNQUOTED_BY.finditer(content):
            title = clean_text(match.group(1))
            name = clean_text(match.group(2))
            if title and name:
                yield _Candidate(title, name, self._window(content, match), min_score=0.3)

    def _contextual_mentions(self, content: str, kind: MediaKind) -> Iterator[_Candidate]:
        for match in self._mention_patterns[kind.media_type].finditer(content):
            title = clean_text(match.group(1))
            if title:
                yield _Candidate(title, None, self._window(content, match), min_score=0.5)

    def _director_possessive(self, content: str, kind: MediaKind) -> Iterator[_Candidate]:
        if not kind.possessive_pass:
            return
        for match in _DIRECTOR_POSSESSIVE.finditer(content):
            name = clean_text(match.group(1))
            title = clean_text(match.group(2))
            if title and name:
                yield _Candidate(title, name, self._window(content, match), min_score=0.3)

    # ------------------------------------------------------------------
    # Scoring & tagging
    # ------------------------------------------------------------------

    def score(self, kind: MediaKind, context: str, title: str, name: Optional[str] = None) -> float:
        """Heuristic confidence in [0, 1] that ``title`` names a work of ``kind``."""
        confidence = 0.3
        lowered = context.lower()

        for indicator in kind.indicators:
            if indicator.lower() in lowered:
                confidence += 0.1

        if name and len(name) > 2:
            confidence += 0.2

        ideal_lo, ideal_hi = kind.ideal_title_length
        if ideal_lo < len(title) < ideal_hi:
            confidence += 0.1

        if f'"{title}"' in context or f"“{title}”" in context:
            confidence += 0.2

        plausible_lo, plausible_hi = kind.plausible_title_length
        if len(title) < plausible_lo or len(title) > plausible_hi:
            confidence -= 0.3

        # Sentence fragments, not titles
        if len(title.split(" ")) > kind.max_title_words:
            confidence -= 0.2

        return max(0.0, min(1.0, confidence))

    def extract_genres(self, text: str) -> List[str]:
        genres: List[str] = []
        lowered = text.lower()
        for genre in self.vocabulary.genres:
            if genre.lower() in lowered:
                label = _capitalize_words(genre)
                if label not in genres:
                    genres.append(label)
        return genres


_default_parser = AIResponseParser()


def parse_response(content: Optional[str]) -> ParsedResponse:
    return _default_parser.parse(content)
