"""Tests for the HTTP API."""

import base64
from uuid import UUID, uuid4

from fastapi.testclient import TestClient

from diet_assistant.api.app import create_app
from diet_assistant.containers import AppContainer
from tests.conftest import InMemoryMenuRepository

IMAGE_BASE64 = base64.b64encode(b"\xff\xd8\xffimage").decode()


def _create_menu(client: TestClient, user_id: UUID, days: int = 1) -> dict:
    response = client.post(
        "/menus/personalized", json={"user_id": str(user_id), "days": days}
    )
    assert response.status_code == 200
    return response.json()["menu"]


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    assert client.get("/health").json() == {"status": "ok"}


def test_analyze_returns_fallback_without_model(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/meals/analyze",
        json={"image_base64": f"data:image/jpeg;base64,{IMAGE_BASE64}"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Analyzed Meal"
    assert body["calories"] == 400
    assert body["confidence"] == 60


def test_analyze_rejects_invalid_base64(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/meals/analyze", json={"image_base64": "not base64!"})

    assert response.status_code == 400


def test_update_analysis_normalizes_original(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/meals/analysis/update",
        json={
            "original": {"name": "Pizza", "calories": "900", "protein": 30},
            "update_text": "חצי",
            "language": "hebrew",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Pizza"
    assert body["calories"] == 450
    assert body["protein_g"] == 15
    assert body["health_notes"] == "עודכן: חצי"


def test_personalized_menu_and_shopping_list(
    container: AppContainer, user_id: UUID
) -> None:
    client = TestClient(create_app(container))
    menu = _create_menu(client, user_id, days=2)

    response = client.get(
        f"/menus/{menu['id']}/shopping-list", params={"user_id": str(user_id)}
    )

    assert len(menu["meals"]) == 6
    assert menu["user_id"] == str(user_id)
    assert response.status_code == 200
    body = response.json()
    assert body["menu_id"] == menu["id"]
    assert {"name": "eggs", "unit": "piece"}.items() <= body["items"][0].items()
    assert body["items"][0]["quantity"] == 4


def test_personalized_menu_requires_questionnaire(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/menus/personalized", json={"user_id": str(uuid4())})

    assert response.status_code == 404
    assert "questionnaire" in response.json()["detail"]


def test_custom_menu(container: AppContainer, user_id: UUID) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/menus/custom",
        json={"user_id": str(user_id), "days": 3, "custom_request": "Vegan dinners"},
    )

    assert response.status_code == 200
    menu = response.json()["menu"]
    assert menu["title"] == "Custom 3-Day Menu"
    assert menu["description"] == "Vegan dinners"


def test_shopping_list_unknown_menu_returns_404(
    container: AppContainer, user_id: UUID
) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        f"/menus/{uuid4()}/shopping-list", params={"user_id": str(user_id)}
    )

    assert response.status_code == 404
    assert response.json() == {"detail": "Menu not found"}


def test_replace_favorite_and_feedback(
    container: AppContainer,
    menu_repository: InMemoryMenuRepository,
    user_id: UUID,
) -> None:
    client = TestClient(create_app(container))
    menu = _create_menu(client, user_id)
    meal = menu["meals"][0]
    base = f"/menus/{menu['id']}/meals/{meal['id']}"

    replaced = client.post(f"{base}/replace", json={"user_id": str(user_id)})
    favorite = client.post(
        f"{base}/favorite", json={"user_id": str(user_id), "is_favorite": True}
    )
    feedback = client.post(
        f"{base}/feedback", json={"user_id": str(user_id), "liked": True}
    )

    assert replaced.status_code == 200
    assert replaced.json()["meal"]["id"] == meal["id"]
    assert replaced.json()["meal"]["name"] in {
        "Grilled Chicken Salad",
        "Quinoa Power Bowl",
        "Baked Salmon with Vegetables",
    }
    assert favorite.json() == {"status": "ok"}
    assert feedback.json() == {"status": "ok"}
    assert len(menu_repository.feedback) == 2


def test_replace_unknown_meal_returns_404(
    container: AppContainer, user_id: UUID
) -> None:
    client = TestClient(create_app(container))
    menu = _create_menu(client, user_id)

    response = client.post(
        f"/menus/{menu['id']}/meals/{uuid4()}/replace",
        json={"user_id": str(user_id)},
    )

    assert response.status_code == 404
    assert response.json() == {"detail": "Meal not found"}
