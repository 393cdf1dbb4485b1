"""Tests for the author and genre directories."""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bookcatalog.models.directory import Author, Genre
from bookcatalog.services.book_service import insert_documents
from bookcatalog.services.catalog_service import rebuild_directory


class TestRebuildDirectory:
    def test_counts(self, directory):
        assert directory == (3, 5)

    def test_author_aggregates(self, db: Session, directory):
        authors = {a.name: a for a in db.query(Author).all()}

        assert authors["Frank Herbert"].total_books == 1
        assert authors["Frank Herbert"].average_rating == 4.6
        assert authors["Ursula K. Le Guin"].average_rating == 4.05
        # Mort is unrated: counted, not averaged
        assert authors["Terry Pratchett"].total_books == 2
        assert authors["Terry Pratchett"].average_rating == 3.9

    def test_default_genre_not_listed(self, db: Session, directory):
        names = {g.name for g in db.query(Genre).all()}

        assert names == {"Science Fiction", "Classic", "Feminism", "Fantasy", "Coming of Age"}

    def test_rebuild_keeps_curated_fields(self, db: Session, directory):
        author = db.query(Author).filter_by(name="Frank Herbert").one()
        author.bio = "American science fiction author."
        db.commit()

        insert_documents(db, [{"title": "Children of Dune", "author": "Frank Herbert", "rating": 4.0}])
        rebuild_directory(db)

        author = db.query(Author).filter_by(name="Frank Herbert").one()
        assert author.bio == "American science fiction author."
        assert author.total_books == 2
        assert author.average_rating == 4.3

    def test_rebuild_drops_orphans(self, db: Session, directory):
        db.add(Genre(name="Westerns", total_books=3))
        db.commit()

        rebuild_directory(db)

        assert db.query(Genre).filter_by(name="Westerns").first() is None


class TestListAuthors:
    def test_sorted_by_rating(self, client: TestClient, directory):
        response = client.get("/api/authors")

        assert response.status_code == 200
        data = response.json()
        assert [a["name"] for a in data["authors"]] == [
            "Frank Herbert",
            "Ursula K. Le Guin",
            "Terry Pratchett",
        ]
        assert data["pagination"] == {
            "currentPage": 1,
            "totalPages": 1,
            "totalAuthors": 3,
            "hasNextPage": False,
            "hasPrevPage": False,
            "limit": 24,
        }

    def test_search(self, client: TestClient, directory):
        data = client.get("/api/authors?search=TERRY").json()

        assert [a["name"] for a in data["authors"]] == ["Terry Pratchett"]
        assert data["authors"][0]["averageRating"] == 3.9

    def test_pagination(self, client: TestClient, directory):
        data = client.get("/api/authors?limit=2&page=2").json()

        assert [a["name"] for a in data["authors"]] == ["Terry Pratchett"]
        assert data["pagination"]["totalPages"] == 2
        assert data["pagination"]["hasPrevPage"] is True

    def test_huge_page_is_empty(self, client: TestClient, directory):
        response = client.get("/api/authors?page=100000000000000000000")

        assert response.status_code == 200
        data = response.json()
        assert data["authors"] == []
        assert data["pagination"]["totalAuthors"] == 3
        assert data["pagination"]["hasNextPage"] is False


class TestListGenres:
    def test_sorted_by_popularity(self, client: TestClient, directory):
        data = client.get("/api/genres").json()

        names = [g["name"] for g in data["genres"]]
        assert set(names[:2]) == {"Science Fiction", "Fantasy"}
        assert data["pagination"]["totalGenres"] == 5

    def test_ids_are_strings(self, client: TestClient, directory):
        genre = client.get("/api/genres?search=feminism").json()["genres"][0]

        assert isinstance(genre["id"], str)
        assert genre["totalBooks"] == 1

    def test_empty_directory(self, client: TestClient):
        data = client.get("/api/genres").json()

        assert data["genres"] == []
        assert data["pagination"]["totalPages"] == 0
