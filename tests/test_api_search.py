"""Tests for the federated search endpoint."""

import pytest
from fastapi.testclient import TestClient


class TestEmptyQuery:
    @pytest.mark.parametrize("query", ["", "   ", "%20%20"])
    def test_empty_query_short_circuits(self, client: TestClient, directory, query):
        response = client.get(f"/api/search?q={query}")

        assert response.status_code == 200
        data = response.json()
        assert data["results"] == {"books": [], "authors": [], "genres": []}
        assert data["total"] == 0
        assert data["totalPages"] == 1

    def test_missing_query(self, client: TestClient):
        response = client.get("/api/search")

        assert response.status_code == 200
        assert response.json()["totalPages"] == 1


class TestSearchAll:
    def test_all_branches(self, client: TestClient, directory):
        response = client.get("/api/search?q=le%20guin")

        data = response.json()
        assert sorted(b["title"] for b in data["results"]["books"]) == [
            "A Wizard of Earthsea",
            "The Left Hand of Darkness",
        ]
        assert [a["name"] for a in data["results"]["authors"]] == ["Ursula K. Le Guin"]
        assert data["results"]["genres"] == []
        assert data["total"] == 2
        assert data["totalPages"] == 1
        assert data["counts"] == {"books": 2, "authors": 1, "genres": 0}

    def test_query_is_case_insensitive_and_trimmed(self, client: TestClient, directory):
        data = client.get("/api/search?q=%20%20PRATCHETT%20").json()

        assert len(data["results"]["books"]) == 2
        assert data["results"]["authors"][0]["name"] == "Terry Pratchett"
        assert data["results"]["authors"][0]["totalBooks"] == 2

    def test_books_are_canonical(self, client: TestClient, directory):
        book = client.get("/api/search?q=dune").json()["results"]["books"][0]

        assert book["genre"] == ["Science Fiction", "Classic"]
        assert book["coverImage"] == "https://covers.example.com/dune.jpg"


class TestSearchTypes:
    def test_genres_only(self, client: TestClient, directory):
        data = client.get("/api/search?q=fantasy&type=genres").json()

        assert [g["name"] for g in data["results"]["genres"]] == ["Fantasy"]
        assert data["results"]["books"] == []
        assert data["results"]["authors"] == []
        assert data["counts"]["books"] is None
        assert data["counts"]["genres"] == 1

    def test_total_tracks_books_even_when_not_requested(self, client: TestClient, directory):
        data = client.get("/api/search?q=pratchett&type=authors").json()

        assert data["results"]["books"] == []
        assert len(data["results"]["authors"]) == 1
        assert data["total"] == 2

    def test_unknown_type_matches_nothing(self, client: TestClient, directory):
        response = client.get("/api/search?q=dune&type=publishers")

        assert response.status_code == 200
        data = response.json()
        assert data["results"] == {"books": [], "authors": [], "genres": []}
        assert data["counts"] == {"books": None, "authors": None, "genres": None}


class TestSearchPagination:
    def test_books_paginated(self, client: TestClient, directory):
        first = client.get("/api/search?q=le%20guin&type=books&limit=1&page=1").json()
        second = client.get("/api/search?q=le%20guin&type=books&limit=1&page=2").json()

        assert first["total"] == 2
        assert first["totalPages"] == 2
        assert len(first["results"]["books"]) == 1
        assert len(second["results"]["books"]) == 1
        assert first["results"]["books"][0]["id"] != second["results"]["books"][0]["id"]

    def test_directory_branches_capped(self, client: TestClient, directory):
        data = client.get("/api/search?q=i&type=genres&limit=2").json()

        assert len(data["results"]["genres"]) == 2
        assert data["counts"]["genres"] > 2

    def test_invalid_page(self, client: TestClient):
        response = client.get("/api/search?q=dune&page=0")

        assert response.status_code == 400
        assert "error" in response.json()

    def test_huge_page_is_empty(self, client: TestClient, directory):
        response = client.get("/api/search?q=dune&type=books&page=100000000000000000000")

        assert response.status_code == 200
        data = response.json()
        assert data["results"]["books"] == []
        assert data["total"] == 1
