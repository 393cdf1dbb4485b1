"""Tests for canonical book normalization."""

import pytest

from bookcatalog.models.book import Book
from bookcatalog.services.normalizer import clamp_rating, normalize_book, parse_genres
from bookcatalog.services.record_adapter import adapt_document, pick


class TestParseGenres:
    """Genre resolution from the many shapes found in stored records."""

    def test_comma_separated_string(self):
        assert parse_genres("Fiction, Drama") == ["Fiction", "Drama"]

    def test_list_is_kept(self):
        assert parse_genres(["Sci-Fi"]) == ["Sci-Fi"]

    @pytest.mark.parametrize("raw", ["", None, []])
    def test_empty_defaults_to_general(self, raw):
        assert parse_genres(raw) == ["General"]

    def test_single_quoted_json_list(self):
        assert parse_genres("['Fantasy','War']") == ["Fantasy", "War"]

    def test_double_quoted_json_list(self):
        assert parse_genres('["Horror", "Gothic"]') == ["Horror", "Gothic"]

    def test_json_string_is_wrapped(self):
        assert parse_genres("'Mystery'") == ["Mystery"]

    def test_single_name(self):
        assert parse_genres("Poetry") == ["Poetry"]

    def test_non_string_list_items_dropped(self):
        assert parse_genres(["Fantasy", 3, None, {"x": 1}, "Epic"]) == ["Fantasy", "Epic"]

    def test_list_of_non_strings_defaults(self):
        assert parse_genres([1, 2]) == ["General"]

    def test_json_number_defaults(self):
        """Valid JSON that is neither a list nor a string resolves to nothing."""
        assert parse_genres("42") == ["General"]

    def test_comma_split_drops_empty_parts(self):
        assert parse_genres("Fantasy, , Adventure,") == ["Fantasy", "Adventure"]

    def test_malformed_json_falls_back_to_split(self):
        assert parse_genres("['Fantasy', War]") == ["['Fantasy'", "War]"]

    def test_other_types_default(self):
        assert parse_genres({"name": "Fantasy"}) == ["General"]
        assert parse_genres(7) == ["General"]


class TestClampRating:
    def test_within_range(self):
        assert clamp_rating(3.5) == 3.5

    def test_clamped(self):
        assert clamp_rating(7.2) == 5.0
        assert clamp_rating(-1) == 0.0

    def test_unrated(self):
        assert clamp_rating(None) is None


class TestRecordAdapter:
    """Field aliasing at the storage boundary."""

    def test_pick_first_non_empty(self):
        assert pick({"book_title": "", "title": "Dune"}, ("book_title", "title")) == "Dune"
        assert pick({}, ("title",)) is None

    def test_alias_priority(self):
        values = adapt_document({"book_title": "Primary", "title": "Secondary"})
        assert values["title"] == "Primary"

    def test_numbers_coerced(self):
        values = adapt_document({"year_of_publication": "1999", "pages": "321.0", "rating": "4.25"})
        assert values["published_year"] == 1999
        assert values["pages"] == 321
        assert values["rating"] == 4.25

    def test_bad_numbers_dropped(self):
        values = adapt_document({"year": "unknown", "pages": True, "rating": "n/a"})
        assert values["published_year"] is None
        assert values["pages"] is None
        assert values["rating"] is None

    def test_genres_kept_raw(self):
        assert adapt_document({"Category": "['A','B']"})["genres"] == "['A','B']"
        assert adapt_document({"genres": ["A"]})["genres"] == ["A"]

    def test_isbn_stringified(self):
        assert adapt_document({"isbn": 9780441013593})["isbn"] == "9780441013593"


class TestNormalizeBook:
    """Canonical book construction."""

    def test_defaults_for_empty_record(self):
        book = normalize_book({"_id": "abc"})

        assert book.id == "abc"
        assert book.title == "Untitled"
        assert book.author == "Unknown Author"
        assert book.description == "No description available."
        assert book.cover_image == "/placeholder.svg"
        assert book.rating is None
        assert book.published_year == 2000
        assert book.genre == ["General"]
        assert book.isbn == "N/A"
        assert book.pages is None
        assert book.language == "English"

    def test_heterogeneous_source_fields(self):
        book = normalize_book(
            {
                "id": 7,
                "book_title": "Dune",
                "book_author": "Frank Herbert",
                "Summary": "Spice.",
                "img_l": "https://covers.example.com/dune.jpg",
                "Category": "['Science Fiction','Classic']",
                "year_of_publication": 1965,
                "Language": "English",
                "rating": 4.6,
                "pages": 412,
            }
        )

        assert book.id == "7"
        assert book.title == "Dune"
        assert book.author == "Frank Herbert"
        assert book.description == "Spice."
        assert book.cover_image == "https://covers.example.com/dune.jpg"
        assert book.genre == ["Science Fiction", "Classic"]
        assert book.published_year == 1965
        assert book.rating == 4.6
        assert book.pages == 412

    def test_stored_row(self):
        row = Book(id=3, title="Mort", author="Terry Pratchett", genres="Fantasy, Humour", rating=9.0)

        book = normalize_book(row)

        assert book.id == "3"
        assert book.title == "Mort"
        assert book.genre == ["Fantasy", "Humour"]
        assert book.rating == 5.0

    def test_camel_case_serialization(self):
        data = normalize_book({"id": 1, "title": "Dune"}).model_dump(by_alias=True)

        assert "coverImage" in data
        assert "publishedYear" in data
        assert data["genre"] == ["General"]
