"""Tests for the public Q&A board."""

from uuid import uuid4

import pytest

from studyhub.exceptions import ForbiddenError, NotFoundError
from studyhub.schemas.doubts import AnswerCreate, DoubtCreate
from studyhub.services import doubts as doubt_service
from studyhub.services.base import MAX_CONTENT_BYTES


async def _post_doubt(client, user, question: str = "What is entropy?") -> dict:
    response = await client.post(
        "/api/doubts",
        json={"question": question, "description": "Thermodynamics", "tags": ["physics"]},
        headers=user.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["doubt"]


async def test_answer_from_another_user_is_listed_with_author(client, alice, bob) -> None:
    doubt = await _post_doubt(client, alice)

    answered = await client.post(
        f"/api/doubts/{doubt['id']}/answers",
        json={"text": "A measure of disorder."},
        headers=bob.headers,
    )
    assert answered.status_code == 201

    listing = await client.get("/api/doubts")
    assert listing.status_code == 200
    [listed] = listing.json()["doubts"]
    assert listed["author"] == {"id": str(alice.id), "name": "Alice"}
    assert len(listed["answers"]) == 1
    answer = listed["answers"][0]
    assert answer["text"] == "A measure of disorder."
    assert answer["author"] == {"id": str(bob.id), "name": "Bob"}
    assert answer["createdAt"]


async def test_listing_is_public_and_newest_first(client, alice) -> None:
    await _post_doubt(client, alice, "First?")
    await _post_doubt(client, alice, "Second?")

    response = await client.get("/api/doubts")

    assert response.json()["count"] == 2
    assert [d["question"] for d in response.json()["doubts"]] == ["Second?", "First?"]


async def test_answers_keep_posting_order(client, alice, bob) -> None:
    doubt = await _post_doubt(client, alice)
    for text in ["one", "two", "three"]:
        await client.post(f"/api/doubts/{doubt['id']}/answers", json={"text": text}, headers=bob.headers)

    response = await client.get(f"/api/doubts/{doubt['id']}")

    assert [a["text"] for a in response.json()["doubt"]["answers"]] == ["one", "two", "three"]


async def test_author_can_answer_own_doubt(client, alice) -> None:
    doubt = await _post_doubt(client, alice)

    response = await client.post(
        f"/api/doubts/{doubt['id']}/answers",
        json={"text": "Never mind, solved it."},
        headers=alice.headers,
    )

    assert response.status_code == 201


async def test_answer_to_missing_doubt_is_404(client, bob) -> None:
    response = await client.post(
        f"/api/doubts/{uuid4()}/answers",
        json={"text": "Hello?"},
        headers=bob.headers,
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Doubt not found"


async def test_resolve_by_non_author_is_forbidden_and_state_unchanged(client, alice, bob) -> None:
    doubt = await _post_doubt(client, alice)

    response = await client.put(
        f"/api/doubts/{doubt['id']}/resolve",
        json={"isResolved": True},
        headers=bob.headers,
    )

    assert response.status_code == 403
    assert response.json()["success"] is False
    stored = await client.get(f"/api/doubts/{doubt['id']}")
    assert stored.json()["doubt"]["isResolved"] is False


async def test_resolve_missing_doubt_is_404(client, alice) -> None:
    response = await client.put(
        f"/api/doubts/{uuid4()}/resolve",
        json={"isResolved": True},
        headers=alice.headers,
    )

    assert response.status_code == 404


async def test_resolve_is_idempotent(client, alice) -> None:
    doubt = await _post_doubt(client, alice)
    path = f"/api/doubts/{doubt['id']}/resolve"

    first = await client.put(path, json={"isResolved": True}, headers=alice.headers)
    second = await client.put(path, json={"isResolved": True}, headers=alice.headers)

    assert first.status_code == second.status_code == 200
    assert first.json()["doubt"]["isResolved"] is True
    assert second.json()["doubt"]["isResolved"] is True


async def test_resolve_can_reopen(client, alice) -> None:
    doubt = await _post_doubt(client, alice)
    path = f"/api/doubts/{doubt['id']}/resolve"

    await client.put(path, json={"isResolved": True}, headers=alice.headers)
    reopened = await client.put(path, json={"isResolved": False}, headers=alice.headers)

    assert reopened.json()["doubt"]["isResolved"] is False
    assert reopened.json()["message"] == "Doubt marked as open"


async def test_list_filters_by_resolved(client, alice) -> None:
    open_doubt = await _post_doubt(client, alice, "Still open?")
    closed = await _post_doubt(client, alice, "Closed?")
    await client.put(f"/api/doubts/{closed['id']}/resolve", json={"isResolved": True}, headers=alice.headers)

    resolved = await client.get("/api/doubts", params={"resolved": "true"})
    unresolved = await client.get("/api/doubts", params={"resolved": "false"})

    assert [d["id"] for d in resolved.json()["doubts"]] == [closed["id"]]
    assert [d["id"] for d in unresolved.json()["doubts"]] == [open_doubt["id"]]


async def test_oversized_description_is_413(client, alice) -> None:
    response = await client.post(
        "/api/doubts",
        json={"question": "Long?", "description": "a" * (MAX_CONTENT_BYTES + 1)},
        headers=alice.headers,
    )

    assert response.status_code == 413


async def test_blank_question_is_400(client, alice) -> None:
    response = await client.post("/api/doubts", json={"question": "  "}, headers=alice.headers)

    assert response.status_code == 400


async def test_unknown_author_has_no_name(client) -> None:
    from studyhub.api.deps import create_access_token

    ghost = {"Authorization": f"Bearer {create_access_token(uuid4())}"}
    await client.post("/api/doubts", json={"question": "Who am I?"}, headers=ghost)

    listing = await client.get("/api/doubts")

    assert listing.json()["doubts"][0]["author"]["name"] is None


# =============================================================================
# SERVICE LAYER
# =============================================================================


async def test_service_set_resolved_checks_owner_before_mutating(db_session) -> None:
    author, stranger = uuid4(), uuid4()
    doubt = await doubt_service.create_doubt(db_session, author, DoubtCreate(question="Why?"))

    with pytest.raises(ForbiddenError):
        await doubt_service.set_resolved(db_session, doubt.id, stranger, True)

    reloaded = await doubt_service.get_doubt(db_session, doubt.id)
    assert reloaded.is_resolved is False


async def test_service_add_answer_to_missing_doubt(db_session) -> None:
    with pytest.raises(NotFoundError):
        await doubt_service.add_answer(db_session, uuid4(), uuid4(), AnswerCreate(text="?"))
