"""
Tests for accounts: the credential store, the sign-up / log-in rules and the
/auth endpoints.
"""

import json

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token, decode_access_token, verify_password
from app.services import auth_service
from app.services.auth_service import AuthError
from app.services.credential_store import (
    CURRENT_USER_KEY,
    USERS_KEY,
    InMemoryCredentialStore,
    KeyValueCredentialStore,
    StoredUser,
)
from app.services.writer_session import session_registry


@pytest.fixture(params=["memory", "kv"])
def any_store(request, db):
    """Run store tests against both backings."""
    if request.param == "memory":
        return InMemoryCredentialStore()
    return KeyValueCredentialStore(db)


# ---------------------------------------------------------------------------
# CREDENTIAL STORE
# ---------------------------------------------------------------------------

class TestCredentialStore:

    def test_empty_store(self, any_store):
        assert any_store.list_users() == []
        assert any_store.find_user("nobody") is None
        assert any_store.get_current_user() is None

    def test_save_and_find(self, any_store):
        any_store.save_user(StoredUser("alice", "h1"))
        any_store.save_user(StoredUser("bob", "h2"))

        assert [u.username for u in any_store.list_users()] == ["alice", "bob"]
        assert any_store.find_user("bob") == StoredUser("bob", "h2")

    def test_save_replaces_existing(self, any_store):
        any_store.save_user(StoredUser("alice", "old"))
        any_store.save_user(StoredUser("alice", "new"))

        assert any_store.list_users() == [StoredUser("alice", "new")]

    def test_current_user(self, any_store):
        any_store.set_current_user("alice")
        assert any_store.get_current_user() == "alice"

        any_store.clear_current_user()
        assert any_store.get_current_user() is None

    def test_clear_current_user_when_unset(self, any_store):
        any_store.clear_current_user()
        assert any_store.get_current_user() is None

    def test_stored_layout(self):
        store = InMemoryCredentialStore()
        store.save_user(StoredUser("alice", "hash"))
        store.set_current_user("alice")

        assert json.loads(store._data[USERS_KEY]) == [{"username": "alice", "passwordHash": "hash"}]
        assert store._data[CURRENT_USER_KEY] == "alice"

    def test_corrupt_user_list_reads_as_empty(self):
        store = InMemoryCredentialStore()
        store._set(USERS_KEY, "not json")
        assert store.list_users() == []


# ---------------------------------------------------------------------------
# AUTH SERVICE
# ---------------------------------------------------------------------------

class TestSignUpRules:

    @pytest.mark.parametrize("username,password,confirm,message", [
        ("", "secret123", "secret123", "Username and password cannot be empty."),
        ("alice", "", "", "Username and password cannot be empty."),
        ("alice", "secret123", "secret124", "Passwords do not match."),
        ("alice", "abc", "abc", "Password must be at least 6 characters long."),
    ])
    def test_validation(self, username, password, confirm, message):
        with pytest.raises(AuthError, match=message):
            auth_service.sign_up(InMemoryCredentialStore(), username, password, confirm)

    def test_mismatch_reported_before_length(self):
        with pytest.raises(AuthError, match="Passwords do not match."):
            auth_service.validate_signup("alice", "abc", "abd")

    def test_success_hashes_password(self):
        store = InMemoryCredentialStore()

        message = auth_service.sign_up(store, "alice", "secret123", "secret123")

        assert message == "Account created successfully! Please log in."
        user = store.find_user("alice")
        assert user.password_hash != "secret123"
        assert verify_password("secret123", user.password_hash)
        assert store.get_current_user() is None

    def test_duplicate_username(self):
        store = InMemoryCredentialStore()
        auth_service.sign_up(store, "alice", "secret123", "secret123")

        with pytest.raises(AuthError, match="Username already exists."):
            auth_service.sign_up(store, "alice", "other-pass", "other-pass")


class TestLogIn:

    def test_success_sets_current_user(self):
        store = InMemoryCredentialStore()
        auth_service.sign_up(store, "alice", "secret123", "secret123")

        user = auth_service.log_in(store, "alice", "secret123")

        assert user.username == "alice"
        assert store.get_current_user() == "alice"

    @pytest.mark.parametrize("username,password", [("alice", "wrong-pass"), ("ghost", "secret123")])
    def test_invalid_credentials_share_one_message(self, username, password):
        store = InMemoryCredentialStore()
        auth_service.sign_up(store, "alice", "secret123", "secret123")

        with pytest.raises(AuthError, match="Invalid username or password."):
            auth_service.log_in(store, username, password)
        assert store.get_current_user() is None

    def test_log_out(self):
        store = InMemoryCredentialStore()
        store.set_current_user("alice")

        auth_service.log_out(store, "alice")

        assert store.get_current_user() is None

    def test_log_out_keeps_slot_held_by_another_user(self):
        store = InMemoryCredentialStore()
        store.set_current_user("bob")

        auth_service.log_out(store, "alice")

        assert store.get_current_user() == "bob"


class TestTokens:

    def test_round_trip(self):
        assert decode_access_token(create_access_token(subject="alice")) == "alice"

    def test_garbage_token(self):
        assert decode_access_token("not-a-jwt") is None


# ---------------------------------------------------------------------------
# /auth ENDPOINTS
# ---------------------------------------------------------------------------

class TestAuthEndpoints:

    def test_signup(self, client: TestClient, store):
        response = client.post("/auth/signup", json={
            "username": "alice",
            "password": "secret123",
            "confirm_password": "secret123",
        })

        assert response.status_code == 201
        assert response.json() == {"message": "Account created successfully! Please log in."}
        assert store.find_user("alice") is not None

    def test_signup_rejected(self, client: TestClient):
        response = client.post("/auth/signup", json={
            "username": "alice",
            "password": "secret123",
            "confirm_password": "different",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Passwords do not match."

    def test_signup_duplicate(self, client: TestClient, test_user):
        response = client.post("/auth/signup", json={
            "username": test_user.username,
            "password": "secret123",
            "confirm_password": "secret123",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Username already exists."

    def test_login(self, client: TestClient, test_user, store):
        response = client.post("/auth/login", json={"username": "writer", "password": "secret123"})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert decode_access_token(data["access_token"]) == "writer"
        assert store.get_current_user() == "writer"

    def test_login_wrong_password(self, client: TestClient, test_user):
        response = client.post("/auth/login", json={"username": "writer", "password": "nope-nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password."

    def test_me(self, client: TestClient, auth_headers):
        response = client.get("/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"username": "writer"}

    def test_me_without_token(self, client: TestClient):
        response = client.get("/auth/me")
        assert response.status_code in (401, 403)

    def test_me_with_token_for_unknown_user(self, client: TestClient):
        token = create_access_token(subject="ghost")
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_logout_clears_user_and_session(self, client: TestClient, auth_headers, store):
        store.set_current_user("writer")
        session_registry.get("writer")

        response = client.post("/auth/logout", headers=auth_headers)

        assert response.status_code == 200
        assert store.get_current_user() is None
        assert "writer" not in session_registry

    def test_logout_of_earlier_user_keeps_later_login(self, client: TestClient, store):
        for username in ("alice", "bob"):
            client.post("/auth/signup", json={
                "username": username,
                "password": "secret123",
                "confirm_password": "secret123",
            })
        alice_token = client.post(
            "/auth/login", json={"username": "alice", "password": "secret123"}
        ).json()["access_token"]
        client.post("/auth/login", json={"username": "bob", "password": "secret123"})
        assert store.get_current_user() == "bob"

        response = client.post("/auth/logout", headers={"Authorization": f"Bearer {alice_token}"})

        assert response.status_code == 200
        assert store.get_current_user() == "bob"
