"""
Integration tests for the v1 API endpoints.

WHAT: Exercise every route through FastAPI's TestClient
WHY: Ensure API contract and error body shape
HOW: In-process client, zero turn delays, round-robin phrasing
"""

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from buynder.core.config import settings
from buynder.core.session_manager import conversation_manager
from buynder.core.watchlist import watchlist
from buynder.main import app
from buynder.middleware.error_handler import business_exception_handler
from buynder.utils.exceptions import TurnInProgressException


@pytest.fixture
def client(monkeypatch):
    """Create FastAPI test client with instant, deterministic replies."""
    monkeypatch.setattr(conversation_manager, "seller_delay", 0)
    monkeypatch.setattr(conversation_manager, "helper_delay", 0)
    monkeypatch.setattr(settings, "PHRASE_SELECTION", "round_robin")
    yield TestClient(app)
    conversation_manager.clear()
    watchlist.clear()


@pytest.fixture
def listing_json(listing):
    return listing.model_dump(mode="json")


def _transcript(*pairs):
    return [{"sender": sender, "text": text} for sender, text in pairs]


@pytest.mark.integration
def test_health(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["app"] == settings.APP_NAME
    assert body["conversations"] == 0


@pytest.mark.integration
def test_root(client):
    assert client.get("/").json()["status"] == "running"


@pytest.mark.integration
def test_swipe_evaluate(client, listing_json):
    response = client.post("/api/v1/swipe/evaluate", json={
        "listing": listing_json,
        "prefs": {"max_price": 100, "min_quality": "like_new"},
    })
    assert response.status_code == 200
    body = response.json()
    assert body["decision"] == "reject"
    assert body["reason"] == "Exceeds maximum price preference of $100."


@pytest.mark.integration
def test_coach_message(client, listing_json):
    response = client.post("/api/v1/coach/message", json={
        "listing": listing_json,
        "prefs": {"deal_style": "aggressive"},
        "chat_context": _transcript(("buyer", "Would you negotiate?")),
    })
    assert response.status_code == 200
    body = response.json()
    assert body["goal"] == "negotiate_price"
    assert body["counter_offer"]["suggested_price"] == "$96"


@pytest.mark.integration
def test_seller_reply_counter(client, listing_json):
    response = client.post("/api/v1/negotiation/seller-reply", json={
        "listing": listing_json,
        "transcript": _transcript(("buyer", "$95")),
    })
    assert response.status_code == 200
    assert response.json()["reply"] == (
        "Thanks for the offer, but that's a little low. Could you meet me at $110?"
    )


@pytest.mark.integration
def test_seller_reply_empty_transcript(client, listing_json):
    response = client.post("/api/v1/negotiation/seller-reply", json={"listing": listing_json})
    assert "$120" in response.json()["reply"]


@pytest.mark.integration
def test_buyer_suggestions_opening(client, listing_json):
    response = client.post("/api/v1/negotiation/buyer-suggestions", json={
        "listing": listing_json,
        "transcript": [],
    })
    assert response.status_code == 200
    assert response.json()["target_price"] == 105


@pytest.mark.integration
def test_classify(client, listing_json):
    response = client.post("/api/v1/negotiation/classify", json={
        "listing": listing_json,
        "transcript": _transcript(("buyer", "$95"), ("seller", "How about $110?")),
    })
    body = response.json()
    assert body["phase"] == "seller_countered"
    assert body["anchor_price"] == 110
    assert body["buyer_offers"] == [95]


@pytest.mark.integration
def test_conversation_lifecycle(client, listing_json):
    response = client.post("/api/v1/conversations", json={"listing": listing_json})
    assert response.status_code == 201
    conversation_id = response.json()["id"]

    response = client.post(f"/api/v1/conversations/{conversation_id}/greeting")
    assert response.status_code == 200
    assert "$120" in response.json()["seller_message"]["text"]

    response = client.post(f"/api/v1/conversations/{conversation_id}/messages", json={"message": "$95"})
    assert response.status_code == 200
    body = response.json()
    assert "$110" in body["seller_message"]["text"]
    assert body["buyer_helper"]["target_price"] == 105
    assert len(body["conversation"]["messages"]) == 4

    summaries = client.get("/api/v1/conversations").json()
    assert summaries[0]["id"] == conversation_id
    assert summaries[0]["message_count"] == 4

    suggestions = client.get(f"/api/v1/conversations/{conversation_id}/suggestions").json()
    assert suggestions["target_price"] == 105

    assert client.get(f"/api/v1/conversations/{conversation_id}").status_code == 200
    assert client.delete(f"/api/v1/conversations/{conversation_id}").status_code == 204

    response = client.get(f"/api/v1/conversations/{conversation_id}")
    assert response.status_code == 404
    assert response.json()["error"] == "CONVERSATION_NOT_FOUND"


@pytest.mark.integration
def test_blank_message_is_validation_error(client, listing_json):
    conversation_id = client.post("/api/v1/conversations", json={"listing": listing_json}).json()["id"]
    response = client.post(f"/api/v1/conversations/{conversation_id}/messages", json={"message": "  "})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert "timestamp" in body


@pytest.mark.integration
def test_second_greeting_is_rejected(client, listing_json):
    conversation_id = client.post("/api/v1/conversations", json={"listing": listing_json}).json()["id"]
    client.post(f"/api/v1/conversations/{conversation_id}/greeting")
    response = client.post(f"/api/v1/conversations/{conversation_id}/greeting")
    assert response.status_code == 400


@pytest.mark.integration
def test_invalid_listing_payload(client, listing_json):
    listing_json["asking_price"] = -5
    response = client.post("/api/v1/swipe/evaluate", json={"listing": listing_json})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.integration
def test_watchlist(client, listing_json):
    assert client.post("/api/v1/watchlist", json={"listing": listing_json}).status_code == 201
    response = client.post("/api/v1/watchlist", json={"listing": listing_json})
    assert response.json()["count"] == 1

    assert client.get("/api/v1/watchlist").json()["items"][0]["id"] == "listing-1"

    response = client.delete("/api/v1/watchlist/listing-1")
    assert response.json()["count"] == 0

    response = client.delete("/api/v1/watchlist/listing-1")
    assert response.status_code == 404
    assert response.json()["error"] == "LISTING_NOT_FOUND"


@pytest.mark.integration
def test_turn_in_progress_maps_to_conflict():
    response = asyncio.run(business_exception_handler(None, TurnInProgressException("conv-1")))
    assert response.status_code == 409
    assert json.loads(response.body)["error"] == "TURN_IN_PROGRESS"
