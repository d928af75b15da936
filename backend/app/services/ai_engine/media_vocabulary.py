"""
media_vocabulary.py (AI Engine)
- Indicator keywords, genre vocabulary and per-kind scoring bounds for the AI response parser.
- Everything here is immutable; AIResponseParser binds an ExtractorVocabulary at construction.
"""
from dataclasses import dataclass
from typing import Tuple


BOOK_INDICATORS = (
    "book",
    "novel",
    "author",
    "written by",
    "by ",
    "read",
    "reading",
    "literature",
    "fiction",
    "non-fiction",
    "memoir",
    "biography",
    "published",
    "bestseller",
    "page-turner",
)

MOVIE_INDICATORS = (
    "movie",
    "film",
    "directed by",
    "director",
    "watch",
    "watching",
    "cinema",
    "screenplay",
    "starring",
    "cast",
    "released",
    "blockbuster",
    "documentary",
    "thriller",
    "comedy",
    "drama",
)

# Order matters: genres are reported in vocabulary order
GENRE_VOCABULARY = (
    "science fiction",
    "sci-fi",
    "fantasy",
    "mystery",
    "thriller",
    "romance",
    "horror",
    "comedy",
    "drama",
    "action",
    "adventure",
    "biography",
    "memoir",
    "non-fiction",
    "fiction",
    "historical",
    "contemporary",
    "young adult",
    "ya",
    "children",
    "self-help",
    "business",
    "philosophy",
    "psychology",
    "true crime",
    "documentary",
    "animated",
    "musical",
)


@dataclass(frozen=True)
class MediaKind:
    """How one media type is recognised and scored.

    Title bounds are exclusive (lo, hi) pairs: ``ideal_title_length`` earns the
    length bonus, anything outside ``plausible_title_length`` is penalised.
    """
    media_type: str
    name_field: str
    indicators: Tuple[str, ...]
    mention_verbs: Tuple[str, ...]
    ideal_title_length: Tuple[int, int]
    plausible_title_length: Tuple[int, int]
    max_title_words: int
    directed_by: bool = False
    unquoted_by_pass: bool = False
    possessive_pass: bool = False


@dataclass(frozen=True)
class ExtractorVocabulary:
    book: MediaKind
    movie: MediaKind
    genres: Tuple[str, ...] = GENRE_VOCABULARY

    @property
    def kinds(self) -> Tuple[MediaKind, MediaKind]:
        return (self.book, self.movie)


BOOK_KIND = MediaKind(
    media_type="book",
    name_field="author",
    indicators=BOOK_INDICATORS,
    mention_verbs=("book", "novel", "read", "reading"),
    ideal_title_length=(5, 100),
    plausible_title_length=(3, 80),
    max_title_words=8,
    unquoted_by_pass=True,
)

MOVIE_KIND = MediaKind(
    media_type="movie",
    name_field="director",
    indicators=MOVIE_INDICATORS,
    mention_verbs=("movie", "film", "watch", "watching"),
    ideal_title_length=(3, 80),
    plausible_title_length=(2, 60),
    max_title_words=6,
    directed_by=True,
    possessive_pass=True,
)

DEFAULT_VOCABULARY = ExtractorVocabulary(book=BOOK_KIND, movie=MOVIE_KIND)
