from __future__ import annotations

from fastapi.testclient import TestClient

ONBOARDING = {
    "age": 25,
    "gender": "male",
    "weightLbs": 180,
    "heightInches": 70,
    "activityLevel": "moderate",
    "proteinPercentage": 30,
    "carbsPercentage": 40,
    "fatPercentage": 30,
}


def signup(client: TestClient, email: str = "ana@example.com") -> dict[str, str]:
    """Register a user and return ready-to-use auth headers."""
    r = client.post("/api/v1/auth/signup", json={"email": email, "password": "password123"})
    assert r.status_code == 201, r.text
    return {"Authorization": f"Bearer {r.json()['user']['token']}"}
