"""
Tests for article and favorites endpoints.
"""


class TestListArticles:
    """Tests for GET /articles."""

    def test_lists_all(self, client):
        response = client.get("/articles")
        assert response.status_code == 200
        data = response.json()
        assert [a["id"] for a in data["articles"]] == [1, 2, 3]
        assert data["current_page"] == 1
        assert data["total_pages"] == 1
        assert data["total_articles"] == 3
        assert data["articles"][0]["cover_color"] == "#8B4513"

    def test_title_search(self, client):
        data = client.get("/articles", params={"q": "plant"}).json()
        assert [a["id"] for a in data["articles"]] == [2]

    def test_author_search(self, client):
        data = client.get("/articles", params={"q": "okafor", "mode": "author"}).json()
        assert [a["id"] for a in data["articles"]] == [3]

    def test_content_search(self, client):
        data = client.get("/articles", params={"q": "auxin", "mode": "content"}).json()
        assert [a["id"] for a in data["articles"]] == [2]

    def test_localized_listing(self, client):
        data = client.get("/articles", params={"language": "tr"}).json()
        titles = [a["title"] for a in data["articles"]]
        assert titles[0] == "Mikro Yerçekiminde Kemik Kaybı"
        # Untranslated article keeps its default title
        assert titles[2] == "Immune Changes in Astronauts"

    def test_pagination_clamps(self, client):
        data = client.get("/articles", params={"page": 9, "page_size": 2}).json()
        assert data["current_page"] == 2
        assert data["total_pages"] == 2
        assert [a["id"] for a in data["articles"]] == [3]

    def test_no_results(self, client):
        data = client.get("/articles", params={"q": "zzz"}).json()
        assert data["articles"] == []
        assert data["total_pages"] == 1

    def test_marks_favorites(self, client):
        client.post("/articles/2/favorite")
        data = client.get("/articles").json()
        flags = {a["id"]: a["is_favorite"] for a in data["articles"]}
        assert flags == {1: False, 2: True, 3: False}

    def test_invalid_params(self, client):
        assert client.get("/articles", params={"mode": "tags"}).status_code == 422
        assert client.get("/articles", params={"language": "fr"}).status_code == 422
        assert client.get("/articles", params={"page_size": 0}).status_code == 422


class TestArticleDetail:
    """Tests for GET /articles/{id}."""

    def test_default_detail(self, client):
        data = client.get("/articles/1").json()
        assert data["title"] == "Bone Loss in Microgravity"
        assert data["difficulty"] == "beginner"
        assert data["content"] == "Astronauts lose bone mass in space."
        assert data["summary"] is None
        assert data["available_difficulties"] == ["beginner", "advanced"]

    def test_translated_detail(self, client):
        data = client.get("/articles/1", params={"language": "tr"}).json()
        assert data["language"] == "tr"
        assert data["content"] == "Astronotlar uzayda kemik kütlesi kaybeder."
        assert data["summary"] == "Kemik yoğunluğu neden azalır?"

    def test_missing_tier_falls_back(self, client):
        data = client.get(
            "/articles/1", params={"language": "tr", "difficulty": "advanced"}
        ).json()
        assert data["content"].startswith("Osteoclast activity")

    def test_not_found(self, client):
        response = client.get("/articles/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Article not found"


class TestFavorites:
    """Tests for the favorites endpoints."""

    def test_add_and_list(self, client):
        assert client.post("/articles/3/favorite").json() == {"article_id": 3, "is_favorite": True}
        client.post("/articles/1/favorite")
        client.post("/articles/1/favorite")

        data = client.get("/articles/favorites").json()
        assert [a["id"] for a in data] == [1, 3]
        assert all(a["is_favorite"] for a in data)

    def test_remove_is_idempotent(self, client):
        client.post("/articles/2/favorite")
        assert client.delete("/articles/2/favorite").status_code == 200
        assert client.delete("/articles/2/favorite").json()["is_favorite"] is False
        assert client.get("/articles/favorites").json() == []

    def test_toggle(self, client):
        assert client.post("/articles/2/favorite/toggle").json()["is_favorite"] is True
        assert client.get("/articles/2").json()["is_favorite"] is True
        assert client.post("/articles/2/favorite/toggle").json()["is_favorite"] is False

    def test_unknown_article(self, client):
        assert client.post("/articles/999/favorite").status_code == 404
        assert client.post("/articles/999/favorite/toggle").status_code == 404

    def test_persisted(self, client, storage):
        client.post("/articles/3/favorite")
        assert storage.get("favorites-storage") == "[3]"
