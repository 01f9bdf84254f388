"""
Integration tests for the question endpoints
"""
import uuid


def _create_category(client, key="romance", label="Romance"):
    r = client.post("/admin/api/categories", json={"key": key, "label": label, "icon": "heart"})
    assert r.status_code == 201
    return r.json()["data"]["id"]


def _create_question(client, category_id, en="Q1", fr=None, ja=None):
    r = client.post(
        "/admin/api/questions",
        json={
            "category_id": category_id,
            "question_text_en": en,
            "question_text_fr": fr,
            "question_text_ja": ja,
        },
    )
    assert r.status_code == 201
    return r.json()["data"]


def test_create_returns_result_and_listing(client):
    category_id = _create_category(client)

    data = _create_question(client, category_id, "Q1", "", "Q1-ja")

    result = data["result"]
    assert result["primary"]["language"] == "en"
    assert result["primary"]["question_id"] == result["base_question_id"]
    assert set(result["translations"]) == {"ja"}
    assert result["fully_synced"] is True

    listing = data["listing"]
    assert listing["pagination"]["total_count"] == 1
    assert listing["questions"][0]["translation_count"] == 2
    assert listing["missing_translations_count"] == 1


def test_create_without_english_text(client):
    category_id = _create_category(client)

    r = client.post("/admin/api/questions", json={"category_id": category_id, "question_text_en": ""})

    assert r.status_code == 400
    body = r.json()
    assert body["status"] == "error"
    assert body["error"]["code"] == "VALIDATION_ERROR"

    listing = client.get("/admin/api/questions/list").json()["data"]
    assert listing["questions"] == []


def test_create_with_malformed_category(client):
    r = client.post("/admin/api/questions", json={"category_id": "nope", "question_text_en": "Q1"})

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_IDENTIFIER"


def test_list_with_filters(client):
    romance = _create_category(client)
    travel = _create_category(client, "travel", "Travel")
    _create_question(client, romance, "Q1", "Q1-fr", "Q1-ja")

    r = client.get("/admin/api/questions/list", params={"category_id": travel, "per_page": 37})

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["questions"] == []
    assert data["pagination"] == {
        "total_count": 0,
        "current_page": 1,
        "total_pages": 1,
        "items_per_page": 25,
    }
    assert data["selected_category_id"] == travel


def test_translations_and_update_flow(client):
    category_id = _create_category(client)
    base_id = _create_question(client, category_id, "Q1")["result"]["base_question_id"]

    r = client.put(
        f"/admin/api/questions/{base_id}",
        json={
            "category_id": category_id,
            "lang_code": "fr",
            "question_text": "Q1",
            "question_text_translation": "Q1-fr",
        },
    )
    assert r.status_code == 200
    update = r.json()["data"]
    assert update["created"] is True
    assert update["question"]["base_question_id"] == base_id
    assert update["question"]["language_code"] == "fr"

    r = client.get(f"/admin/api/questions/{base_id}/translations")
    translations = r.json()["data"]
    assert translations["english"]["text"] == "Q1"
    assert translations["french"]["text"] == "Q1-fr"
    assert translations["japanese"] is None
    assert translations["completeness"] == 2

    r = client.get("/admin/api/questions/status", params={"ids": [base_id, update["question"]["id"]]})
    assert r.json()["data"] == {base_id: 2, update["question"]["id"]: 2}


def test_update_english_when_missing(client):
    category_id = _create_category(client)
    created = _create_question(client, category_id, "Q1", "Q1-fr")["result"]
    french_id = created["translations"]["fr"]["question_id"]
    client.delete(f"/admin/api/questions/{created['base_question_id']}")

    r = client.put(
        f"/admin/api/questions/{french_id}",
        json={"category_id": category_id, "lang_code": "en", "question_text": "Q1 again"},
    )

    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONSISTENCY_ERROR"

    orphans = client.get("/admin/api/questions/orphans").json()["data"]
    assert [o["id"] for o in orphans] == [french_id]


def test_get_unknown_question(client):
    r = client.get(f"/admin/api/questions/{uuid.uuid4()}")

    assert r.status_code == 404
    body = r.json()
    assert body["status"] == "error"
    assert body["data"] is None
    assert body["error"]["code"] == "NOT_FOUND"


def test_form_and_stats(client):
    category_id = _create_category(client)
    base_id = _create_question(client, category_id, "Q1", "Q1-fr", "Q1-ja")["result"]["base_question_id"]

    form = client.get(f"/admin/api/questions/{base_id}/form").json()["data"]
    assert form["question_text"] == "Q1"
    assert form["translation_fr"] == "Q1-fr"
    assert form["translation_ja"] == "Q1-ja"
    assert form["lang_en"] is True

    stats = client.get("/admin/api/questions/stats").json()["data"]
    assert stats["total_questions"] == 1
    assert stats["missing_translations_count"] == 0


def test_delete_returns_refreshed_listing(client):
    category_id = _create_category(client)
    base_id = _create_question(client, category_id, "Q1")["result"]["base_question_id"]
    _create_question(client, category_id, "Q2")

    r = client.delete(f"/admin/api/questions/{base_id}")

    assert r.status_code == 200
    listing = r.json()["data"]
    assert [q["text"] for q in listing["questions"]] == ["Q2"]


def test_languages(client):
    r = client.get("/admin/api/languages")

    assert r.json()["data"] == {"languages": ["en", "fr", "ja"]}
