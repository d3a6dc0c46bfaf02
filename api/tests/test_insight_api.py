"""Tests for tree insight and tarot interpretation endpoints."""

import pytest

PLACEMENTS = [
    {"body": "Sun", "sign": "Aries", "degree_in_sign": 0.0, "longitude": 0.0},
    {"body": "Venus", "sign": "Leo", "degree_in_sign": 0.0, "longitude": 120.0},
]

INSIGHT = {
    "graph_summary": {
        "sephiroth": [{"name": "Tiphereth", "state": "connected"}],
        "paths": [{"letter": "Samech", "from": "Tiphereth", "to": "Netzach", "state": "connected"}],
        "connected_component": {"sephiroth": ["Tiphereth", "Netzach"], "paths": ["Samech"]},
    },
    "symbolic_reading": "Heart and desire share one breath.",
    "final_interpretation": "Keep the channel open.",
    "divine_key": {
        "sum_overall": {"total": 1289, "digit_root": 2, "meaning": "Wisdom"},
        "sum_connected": {"total": 1289, "digit_root": 2, "meaning": "Wisdom"},
    },
}


@pytest.mark.asyncio
async def test_tree_insight(client, llm):
    llm.responses.append(INSIGHT)
    resp = await client.post(
        "/v1/tree-insight",
        json={"placements": PLACEMENTS, "utterance_date": "2026-10-17"},
    )
    assert resp.status_code == 200
    body = resp.json()

    assert body["final_interpretation"] == "Keep the channel open."
    assert body["divine_utterance"]["utterance_date"] == "2026-10-17"
    assert body["divine_utterance"]["graph"]["illuminated_paths"][0]["from"] == "Tiphereth"
    assert body["divine_key"]["sum_connected"]["total"] == 1289
    assert body["issues"] == []


@pytest.mark.asyncio
async def test_tree_insight_degrades_without_llm(client):
    resp = await client.post("/v1/tree-insight", json={"placements": PLACEMENTS})
    assert resp.status_code == 200
    body = resp.json()
    assert body["final_interpretation"] == "Unable to generate interpretation at this time."
    assert body["issues"][0]["kind"] == "llm_failure"
    assert body["graph"]["component"]["sephiroth"] == ["Tiphereth", "Netzach"]


@pytest.mark.asyncio
async def test_tree_insight_requires_placements(client):
    resp = await client.post("/v1/tree-insight", json={"placements": []})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_interpret_tarot(client, llm):
    llm.responses.append("The Fool steps off the cliff into grace.")
    resp = await client.post(
        "/v1/interpret",
        json={
            "question": "Should I go?",
            "cards": [{"card": {"name": "The Fool", "uprightMeaning": "Beginnings"}, "orientation": "upright"}],
        },
    )
    assert resp.status_code == 200
    assert resp.json() == {"interpretation": "The Fool steps off the cliff into grace.", "issues": []}
    assert "Card 1: The Fool (upright)\nMeaning: Beginnings" in llm.calls[0][1]["content"]


@pytest.mark.asyncio
async def test_interpret_requires_cards(client):
    resp = await client.post("/v1/interpret", json={"question": "Should I go?", "cards": []})
    assert resp.status_code == 422
