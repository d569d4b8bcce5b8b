from __future__ import annotations

import logging

from conftest import skill_payload
from skill_exchange.models.review import Review


FULL_PAYLOAD = skill_payload(
    title="Python for Data Analysis",
    description="Pandas, plotting and cleaning real datasets.",
    category="Technology",
    skillType="Seeking",
    instructorName="Priya Nair",
    contactEmail="priya@example.com",
    location="Online",
    duration="6 weeks",
    price=25.5,
    isFree=False,
    skillLevel="Advanced",
)


def test_create_then_fetch_round_trip(client) -> None:
    r = client.post("/api/skills", json=FULL_PAYLOAD)
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    created = body["data"]

    r = client.get(f"/api/skills/{created['id']}")
    assert r.status_code == 200
    fetched = r.json()["data"]

    for key, value in FULL_PAYLOAD.items():
        assert fetched[key] == value, key
    assert fetched["averageRating"] == 0
    assert fetched["reviewCount"] == 0
    assert fetched["createdAt"]
    assert fetched["updatedAt"]


def test_create_applies_defaults_and_normalizes(client) -> None:
    r = client.post(
        "/api/skills",
        json=skill_payload(title="  Knitting  ", contactEmail=" Knit@Example.COM ", location="   "),
    )
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["title"] == "Knitting"
    assert data["contactEmail"] == "knit@example.com"
    assert data["location"] is None
    assert data["price"] == 0
    assert data["isFree"] is False
    assert data["skillLevel"] == "Any"


def test_create_ignores_client_supplied_rating_fields(client) -> None:
    r = client.post("/api/skills", json=skill_payload(averageRating=5, reviewCount=99))
    assert r.status_code == 201
    data = r.json()["data"]
    assert data["averageRating"] == 0
    assert data["reviewCount"] == 0


def test_free_skill_price_forced_to_zero(client) -> None:
    r = client.post("/api/skills", json=skill_payload(isFree=True, price=30))
    assert r.status_code == 201
    assert r.json()["data"]["price"] == 0


def test_create_missing_required_fields(client) -> None:
    r = client.post("/api/skills", json={"title": "Only a title"})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    fields = {e.split(":", 1)[0] for e in body["errors"]}
    assert {"description", "category", "skillType", "instructorName", "contactEmail"} <= fields


def test_create_rejects_invalid_values(client) -> None:
    cases = [
        skill_payload(contactEmail="not-an-email"),
        skill_payload(category="Astrology"),
        skill_payload(skillType="Trading"),
        skill_payload(skillLevel="Expert"),
        skill_payload(price=-1),
        skill_payload(title="x" * 101),
        skill_payload(description="x" * 1001),
        skill_payload(instructorName="x" * 51),
        skill_payload(title="   "),
    ]
    for payload in cases:
        r = client.post("/api/skills", json=payload)
        assert r.status_code == 400, payload
        assert r.json()["success"] is False


def test_invalid_email_error_names_the_field(client) -> None:
    r = client.post("/api/skills", json=skill_payload(contactEmail="bad@address"))
    assert r.status_code == 400
    assert "contactEmail: Please provide a valid email address" in r.json()["errors"]


def test_get_unknown_and_malformed_ids(client) -> None:
    r = client.get("/api/skills/9999")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Skill not found"}

    r = client.get("/api/skills/not-an-id")
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid skill ID format"


def test_out_of_range_and_non_ascii_ids_are_rejected(client, create_skill) -> None:
    create_skill()
    huge = "9" * 30
    for raw in ("%C2%B2", huge, str(2**63), "0"):
        for method in ("get", "delete"):
            r = getattr(client, method)(f"/api/skills/{raw}")
            assert r.status_code == 400, (method, raw)
            assert r.json()["message"] == "Invalid skill ID format"

        r = client.put(f"/api/skills/{raw}", json={"title": "Renamed"})
        assert r.status_code == 400, raw


def test_update_replaces_only_supplied_fields(client, create_skill) -> None:
    skill = create_skill(price=10, location="Library")

    r = client.put(f"/api/skills/{skill['id']}", json={"title": "Advanced Guitar", "averageRating": 4.9})
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["title"] == "Advanced Guitar"
    assert updated["location"] == "Library"
    assert updated["price"] == 10
    assert updated["description"] == skill["description"]
    assert updated["averageRating"] == 0


def test_update_to_free_zeroes_price(client, create_skill) -> None:
    skill = create_skill(price=15)

    r = client.put(f"/api/skills/{skill['id']}", json={"isFree": True})
    assert r.status_code == 200
    assert r.json()["data"]["price"] == 0
    assert r.json()["data"]["isFree"] is True


def test_update_validation_and_missing(client, create_skill) -> None:
    skill = create_skill()

    r = client.put(f"/api/skills/{skill['id']}", json={"title": None})
    assert r.status_code == 400

    r = client.put(f"/api/skills/{skill['id']}", json={"rating": 3, "skillLevel": "Expert"})
    assert r.status_code == 400

    r = client.put("/api/skills/9999", json={"title": "Ghost"})
    assert r.status_code == 404


def test_delete_cascades_reviews(client, create_skill, add_review) -> None:
    skill = create_skill()
    other = create_skill(title="Other")
    add_review(skill["id"], 5)
    add_review(skill["id"], 3)
    add_review(other["id"], 4)

    r = client.delete(f"/api/skills/{skill['id']}")
    assert r.status_code == 200
    assert r.json()["success"] is True

    assert client.get(f"/api/skills/{skill['id']}").status_code == 404
    assert client.get(f"/api/reviews/skill/{skill['id']}").status_code == 404
    assert client.delete(f"/api/skills/{skill['id']}").status_code == 404

    with client.app.state.db.session() as db:
        assert db.query(Review).filter(Review.skill_id == skill["id"]).count() == 0
        assert db.query(Review).filter(Review.skill_id == other["id"]).count() == 1


def test_list_envelope_and_pagination(client, create_skill) -> None:
    for i in range(25):
        create_skill(title=f"Skill {i:02d}")

    r = client.get("/api/skills", params={"limit": 12, "page": 3, "sortBy": "title"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["pagination"] == {"page": 3, "limit": 12, "total": 25, "pages": 3}
    assert [s["title"] for s in body["data"]] == ["Skill 24"]


def test_list_defaults_and_junk_paging(client, create_skill) -> None:
    first = create_skill(title="First")
    second = create_skill(title="Second")

    r = client.get("/api/skills", params={"page": "abc", "limit": "lots"})
    assert r.status_code == 200
    body = r.json()
    assert body["pagination"] == {"page": 1, "limit": 50, "total": 2, "pages": 1}
    # Newest first by default.
    assert [s["id"] for s in body["data"]] == [second["id"], first["id"]]


def test_list_filter_conjunction(client, create_skill) -> None:
    create_skill(title="Free music", category="Music", isFree=True)
    create_skill(title="Paid music", category="Music", price=20)
    create_skill(title="Free cooking", category="Cooking", isFree=True)

    r = client.get("/api/skills", params={"category": "Music", "isFree": "true"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert [s["title"] for s in data] == ["Free music"]
    assert all(s["category"] == "Music" and s["isFree"] for s in data)

    r = client.get("/api/skills", params={"isFree": "false"})
    assert [s["title"] for s in r.json()["data"]] == ["Paid music"]


def test_list_sort_by_rating(client, create_skill, add_review) -> None:
    low = create_skill(title="Low")
    high = create_skill(title="High")
    mid = create_skill(title="Mid")
    add_review(low["id"], 2)
    add_review(high["id"], 5)
    add_review(mid["id"], 4)

    r = client.get("/api/skills", params={"sortBy": "rating"})
    ratings = [s["averageRating"] for s in r.json()["data"]]
    assert ratings == sorted(ratings, reverse=True)
    assert [s["title"] for s in r.json()["data"]] == ["High", "Mid", "Low"]


def test_list_search(client, create_skill) -> None:
    create_skill(title="Sourdough baking", description="Bread from scratch", category="Cooking")
    create_skill(title="Watercolor", description="Paint landscapes", category="Arts & Crafts")

    r = client.get("/api/skills", params={"search": "BREAD"})
    assert [s["title"] for s in r.json()["data"]] == ["Sourdough baking"]
    assert r.json()["pagination"]["total"] == 1

    r = client.get("/api/skills", params={"search": "nothing-matches-this"})
    assert r.json()["data"] == []
    assert r.json()["pagination"]["pages"] == 0


def test_price_keeps_at_most_two_decimals(client) -> None:
    r = client.post("/api/skills", json=skill_payload(price=19.99))
    assert r.status_code == 201
    assert r.json()["data"]["price"] == 19.99

    for price in (10.555, 1e15, 100000000):
        r = client.post("/api/skills", json=skill_payload(price=price))
        assert r.status_code == 400, price
        assert any(e.startswith("price:") for e in r.json()["errors"])


def test_update_rejects_price_with_extra_decimals(client, create_skill) -> None:
    skill = create_skill(price=12)
    r = client.put(f"/api/skills/{skill['id']}", json={"price": 0.001})
    assert r.status_code == 400
    assert client.get(f"/api/skills/{skill['id']}").json()["data"]["price"] == 12


def test_list_page_far_past_the_end_is_empty(client, create_skill) -> None:
    create_skill()

    r = client.get("/api/skills", params={"page": "9" * 25})
    assert r.status_code == 200
    body = r.json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 1
    assert body["pagination"]["pages"] == 1

    r = client.get("/api/skills", params={"limit": "9" * 25})
    assert r.status_code == 200
    assert r.json()["pagination"]["limit"] == 100


def test_delete_logs_stored_review_count(client, create_skill, add_review, caplog) -> None:
    skill = create_skill()
    add_review(skill["id"], 5)
    add_review(skill["id"], 3)

    caplog.set_level(logging.INFO, logger="skill_exchange.services.skill_service")
    assert client.delete(f"/api/skills/{skill['id']}").status_code == 200

    assert f"skill.delete id={skill['id']} review_count=2" in caplog.text
