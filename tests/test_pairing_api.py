"""Tests for the mentor-pairing action endpoint.

Verifies authentication, body validation and the mapping of service
failures to stable error kinds and status codes.
"""

from __future__ import annotations

import pytest

from conftest import add_directory_entry, auth_headers, get_entry
from mentor_pairing.dependencies.auth_dependencies import get_identity_verifier
from mentor_pairing.dependencies.service_dependencies import get_pairing_service
from mentor_pairing.exceptions import TransientError
from mentor_pairing.main import app

URL = "/api/mentor-pairing"
MENTOR = "mentor-1"
STUDENT = "student-1"


@pytest.fixture
def mentor(db):
    return add_directory_entry(db, MENTOR, capacity=1, handle="hermes")


def _request(client, student=STUDENT, **extra):
    body = {"action": "request", "mentorUid": MENTOR, **extra}
    return client.post(URL, json=body, headers=auth_headers(student, handle=f"{student}-handle"))


def _act(client, uid, action, pairing_id, **extra):
    return client.post(URL, json={"action": action, "pairingId": pairing_id, **extra}, headers=auth_headers(uid))


def _assert_error(response, status_code, kind):
    assert response.status_code == status_code, response.text
    body = response.json()
    assert body["success"] is False
    assert body["error"] == kind
    assert body["message"]


# ---------------------------------------------------------------------------
# Boundary checks
# ---------------------------------------------------------------------------


def test_missing_credentials(client):
    _assert_error(client.post(URL, json={"action": "accept", "pairingId": "x"}), 401, "Unauthorized")


def test_non_bearer_credentials(client):
    response = client.post(URL, json={"action": "accept", "pairingId": "x"}, headers={"Authorization": "Basic abc"})
    _assert_error(response, 401, "Unauthorized")


def test_invalid_token(client):
    response = client.post(URL, json={"action": "accept", "pairingId": "x"}, headers={"Authorization": "Bearer nope"})
    _assert_error(response, 401, "Unauthorized")


def test_authentication_checked_before_body(client):
    _assert_error(client.post(URL, json={"action": "dance"}), 401, "Unauthorized")


def test_verifier_crash_fails_closed(client):
    class BrokenVerifier:
        def verify(self, token):
            raise RuntimeError("identity provider unreachable")

    app.dependency_overrides[get_identity_verifier] = lambda: BrokenVerifier()
    response = client.post(URL, json={"action": "accept", "pairingId": "x"}, headers=auth_headers(MENTOR))
    _assert_error(response, 401, "Unauthorized")


def test_non_post_is_rejected(client):
    _assert_error(client.get(URL, headers=auth_headers(MENTOR)), 405, "MethodNotAllowed")


def test_unknown_action(client):
    response = client.post(URL, json={"action": "dance"}, headers=auth_headers(STUDENT))
    _assert_error(response, 400, "InvalidRequest")


@pytest.mark.parametrize(
    "body",
    [
        {"action": "request"},
        {"action": "accept"},
        {"action": "decline", "declineReason": "busy"},
        {"action": "end", "pairingId": ""},
    ],
)
def test_missing_required_field(client, body):
    _assert_error(client.post(URL, json=body, headers=auth_headers(STUDENT)), 400, "InvalidRequest")


def test_self_request(client, mentor):
    response = client.post(URL, json={"action": "request", "mentorUid": MENTOR}, headers=auth_headers(MENTOR))
    _assert_error(response, 400, "InvalidRequest")


# ---------------------------------------------------------------------------
# Lifecycle through the endpoint
# ---------------------------------------------------------------------------


def test_request_accept_end_flow(client, db, mentor):
    response = _request(client, message="  Teach me the Odyssey  ")
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["success"] is True
    assert body["status"] == "pending"
    pairing_id = body["pairingId"]
    assert body["pairing"]["requestMessage"] == "Teach me the Odyssey"
    assert body["pairing"]["studentHandle"] == f"{STUDENT}-handle"
    assert body["pairing"]["mentorHandle"] == "hermes"

    response = _act(client, MENTOR, "accept", pairing_id)
    assert response.status_code == 200, response.text
    assert response.json()["status"] == "accepted"
    assert response.json()["pairing"]["respondedAt"] is not None
    assert get_entry(db, MENTOR).available_slots == 0

    response = _act(client, STUDENT, "end", pairing_id)
    assert response.status_code == 200, response.text
    assert response.json()["status"] == "ended"
    assert get_entry(db, MENTOR).available_slots == 1

    _assert_error(_act(client, STUDENT, "end", pairing_id), 400, "InvalidState")


def test_decline_bounds_reason(client, mentor):
    pairing_id = _request(client).json()["pairingId"]

    response = _act(client, MENTOR, "decline", pairing_id, declineReason="x" * 600)

    assert response.status_code == 200, response.text
    pairing = response.json()["pairing"]
    assert pairing["status"] == "declined"
    assert len(pairing["declineReason"]) == 500


def test_blank_message_is_stored_as_null(client, mentor):
    response = _request(client, message="   ")
    assert response.json()["pairing"]["requestMessage"] is None


def test_missing_handles_get_fallbacks(client, db):
    add_directory_entry(db, MENTOR, handle=None)
    response = client.post(URL, json={"action": "request", "mentorUid": MENTOR}, headers=auth_headers(STUDENT))
    pairing = response.json()["pairing"]
    assert pairing["mentorHandle"] == f"Mentor {MENTOR}"
    assert pairing["studentHandle"] == f"Student {STUDENT}"


# ---------------------------------------------------------------------------
# Error kinds
# ---------------------------------------------------------------------------


def test_unknown_mentor(client):
    _assert_error(_request(client), 404, "NotFound")


def test_unknown_pairing(client):
    _assert_error(_act(client, MENTOR, "accept", "missing"), 404, "NotFound")


def test_student_cannot_accept(client, mentor):
    pairing_id = _request(client).json()["pairingId"]
    _assert_error(_act(client, STUDENT, "accept", pairing_id), 403, "Forbidden")


def test_duplicate_request(client, mentor):
    assert _request(client).status_code == 200
    _assert_error(_request(client), 409, "DuplicatePairing")


def test_accept_at_capacity(client, mentor):
    first = _request(client, student="s1").json()["pairingId"]
    second = _request(client, student="s2").json()["pairingId"]
    assert _act(client, MENTOR, "accept", first).status_code == 200

    _assert_error(_act(client, MENTOR, "accept", second), 400, "AtCapacity")


def test_request_without_slots(client, db):
    add_directory_entry(db, MENTOR, capacity=1, active_students=1)
    _assert_error(_request(client), 400, "NoCapacity")


def test_transient_failure(client):
    class ConflictedService:
        def accept_pairing(self, pairing_id, acting_mentor_id):
            raise TransientError("try again")

    app.dependency_overrides[get_pairing_service] = lambda: ConflictedService()
    _assert_error(_act(client, MENTOR, "accept", "p1"), 503, "Transient")
