"""
Tests for user signup, authentication and profile endpoints.
"""
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from delivery_api.core.security import create_access_token
from delivery_api.models.enums import UserRole
from delivery_api.models.token_blacklist import TokenBlacklist
from delivery_api.models.user import User

PASSWORD = "testpassword123"


def _signup(client: TestClient, username: str, **extra):
    return client.post(
        "/api/user/signup",
        json={"username": username, "password": "securepassword123", "address": "9 Elm St", **extra},
    )


class TestSignup:
    """Tests for POST /api/user/signup."""

    def test_signup_creates_customer(self, client: TestClient, db: Session):
        response = _signup(client, "newuser")

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "newuser"
        assert data["role"] == "CUSTOMER"
        assert "hashed_password" not in data

        db.expire_all()
        user = db.query(User).filter(User.username == "newuser").first()
        assert user is not None
        assert user.hashed_password != "securepassword123"

    def test_signup_as_owner(self, client: TestClient):
        response = _signup(client, "pizzaboss", owner=True)

        assert response.status_code == 201
        assert response.json()["role"] == "OWNER"

    def test_signup_as_manager_needs_token(self, client: TestClient):
        denied = _signup(client, "wannabe", manager=True, manager_token="guess")
        allowed = _signup(client, "realmgr", manager=True, manager_token="let-me-manage")

        assert denied.status_code == 403
        assert allowed.status_code == 201
        assert allowed.json()["role"] == "MANAGER"

    def test_signup_cannot_claim_master(self, client: TestClient):
        response = _signup(client, "sneaky", role="MASTER")

        assert response.status_code == 201
        assert response.json()["role"] == "CUSTOMER"

    def test_signup_duplicate_username(self, client: TestClient, customer: User):
        response = _signup(client, customer.username)

        assert response.status_code == 409
        assert "already registered" in response.json()["detail"].lower()

    def test_signup_invalid_username(self, client: TestClient):
        assert _signup(client, "ab").status_code == 422
        assert _signup(client, "Has-Caps").status_code == 422

    def test_signup_short_password(self, client: TestClient):
        response = client.post("/api/user/signup", json={"username": "shorty", "password": "123"})

        assert response.status_code == 422


class TestLogin:
    """Tests for POST /api/user/login."""

    def test_login_success(self, client: TestClient, customer: User):
        response = client.post(
            "/api/user/login",
            json={"username": customer.username, "password": PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"

    def test_login_wrong_password(self, client: TestClient, customer: User):
        response = client.post(
            "/api/user/login",
            json={"username": customer.username, "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert "invalid" in response.json()["detail"].lower()

    def test_login_nonexistent_user(self, client: TestClient):
        response = client.post("/api/user/login", json={"username": "nobody", "password": "whatever1"})

        assert response.status_code == 401


class TestRefresh:
    """Tests for POST /api/user/refresh."""

    def _refresh_token(self, client: TestClient, user: User) -> str:
        response = client.post("/api/user/login", json={"username": user.username, "password": PASSWORD})
        return response.json()["refresh_token"]

    def test_refresh_success(self, client: TestClient, customer: User):
        refresh_token = self._refresh_token(client, customer)

        response = client.post("/api/user/refresh", json={"refresh_token": refresh_token})

        assert response.status_code == 200
        data = response.json()
        assert data["refresh_token"] != refresh_token

    def test_refresh_token_is_single_use(self, client: TestClient, customer: User):
        refresh_token = self._refresh_token(client, customer)
        client.post("/api/user/refresh", json={"refresh_token": refresh_token})

        response = client.post("/api/user/refresh", json={"refresh_token": refresh_token})

        assert response.status_code == 401

    def test_refresh_rejects_access_token(self, client: TestClient, login, customer: User):
        access_token = login(customer)["Authorization"].split(" ", 1)[1]

        response = client.post("/api/user/refresh", json={"refresh_token": access_token})

        assert response.status_code == 401

    def test_refresh_invalid_token(self, client: TestClient):
        response = client.post("/api/user/refresh", json={"refresh_token": "invalid.token.here"})

        assert response.status_code == 401


class TestLogout:
    """Tests for POST /api/user/logout."""

    def test_logout_revokes_refresh_token(self, client: TestClient, db: Session, customer: User):
        tokens = client.post(
            "/api/user/login",
            json={"username": customer.username, "password": PASSWORD},
        ).json()
        headers = {"Authorization": f"Bearer {tokens['access_token']}"}

        response = client.post(
            "/api/user/logout",
            json={"refresh_token": tokens["refresh_token"]},
            headers=headers,
        )

        assert response.status_code == 200
        assert "logged out" in response.json()["message"].lower()
        assert db.query(TokenBlacklist).one().reason == "logout"
        refreshed = client.post("/api/user/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert refreshed.status_code == 401

    def test_logout_without_body(self, client: TestClient, login, customer: User):
        response = client.post("/api/user/logout", headers=login(customer))

        assert response.status_code == 200

    def test_logout_requires_authentication(self, client: TestClient):
        assert client.post("/api/user/logout").status_code == 401


class TestProfile:
    """Tests for GET/PUT/PATCH /api/user/{username}."""

    def test_get_user_is_public(self, client: TestClient, customer: User):
        response = client.get(f"/api/user/{customer.username}")

        assert response.status_code == 200
        assert response.json()["username"] == customer.username

    def test_get_unknown_user(self, client: TestClient):
        assert client.get("/api/user/ghost").status_code == 404

    def test_update_own_address(self, client: TestClient, login, customer: User):
        response = client.patch(
            f"/api/user/{customer.username}",
            json={"address": "77 New Rd"},
            headers=login(customer),
        )

        assert response.status_code == 200
        assert response.json()["address"] == "77 New Rd"

    def test_update_password_then_login(self, client: TestClient, login, customer: User):
        client.put(
            f"/api/user/{customer.username}",
            json={"password": "brandnewpass1"},
            headers=login(customer),
        )

        response = client.post(
            "/api/user/login",
            json={"username": customer.username, "password": "brandnewpass1"},
        )
        assert response.status_code == 200

    def test_cannot_update_someone_else(self, client: TestClient, login, customer: User, other_customer: User):
        response = client.patch(
            f"/api/user/{other_customer.username}",
            json={"address": "hijacked"},
            headers=login(customer),
        )

        assert response.status_code == 403

    def test_manager_can_update_anyone(self, client: TestClient, login, manager: User, customer: User):
        response = client.patch(
            f"/api/user/{customer.username}",
            json={"address": "set by manager"},
            headers=login(manager),
        )

        assert response.status_code == 200

    def test_update_requires_token(self, client: TestClient, customer: User):
        response = client.patch(f"/api/user/{customer.username}", json={"address": "x"})

        assert response.status_code == 401


class TestTokenValidation:
    """Expired or tampered tokens never authenticate."""

    def test_expired_token_rejected(self, client: TestClient, customer: User):
        token = create_access_token(
            subject=customer.id,
            username=customer.username,
            role=UserRole.CUSTOMER,
            expires_delta=timedelta(minutes=-1),
        )

        response = client.post("/api/user/logout", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_tampered_token_rejected(self, client: TestClient, login, customer: User):
        token = login(customer)["Authorization"].split(" ", 1)[1]
        tampered = token[:-4] + ("AAAA" if not token.endswith("AAAA") else "BBBB")

        response = client.post("/api/user/logout", headers={"Authorization": f"Bearer {tampered}"})

        assert response.status_code == 401

    def test_deleted_user_token_rejected(self, client: TestClient, db: Session, login, customer: User):
        headers = login(customer)
        customer.mark_as_deleted("admin")
        db.commit()

        response = client.post("/api/user/logout", headers=headers)

        assert response.status_code == 401


class TestPasswordByteLimit:
    """bcrypt only takes 72 bytes; longer passwords are rejected, not hashed."""

    def test_login_with_overlong_password(self, client: TestClient, customer: User):
        response = client.post("/api/user/login", json={"username": customer.username, "password": "x" * 80})

        assert response.status_code == 401

    def test_signup_with_multibyte_password_over_limit(self, client: TestClient):
        # 40 characters, 80 bytes
        response = client.post("/api/user/signup", json={"username": "newuser", "password": "é" * 40})

        assert response.status_code == 422

    def test_signup_with_multibyte_password_within_limit(self, client: TestClient):
        response = client.post("/api/user/signup", json={"username": "newuser", "password": "é" * 36})

        assert response.status_code == 201

    def test_update_with_multibyte_password_over_limit(self, client: TestClient, login, customer: User):
        response = client.patch(
            f"/api/user/{customer.username}",
            json={"password": "é" * 40},
            headers=login(customer),
        )

        assert response.status_code == 422
