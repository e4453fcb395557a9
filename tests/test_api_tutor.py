"""Tutor and health API tests"""
from unittest.mock import patch

import pytest

from faris.exceptions import TutorUnavailableError
from faris.schemas.tutor import TutorAnswer
from faris.services import tutor_service


def history(*turns):
    return {"history": [{"role": role, "content": [{"text": text}]} for role, text in turns]}


@pytest.mark.asyncio
async def test_health(client):
    assert (await client.get("/health")).json() == {"status": "healthy"}
    response = await client.get("/health/db")
    assert response.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_tutor_reply(client, student_headers):
    with patch.object(tutor_service, "ask_tutor", return_value=TutorAnswer(answer="الفاعل اسم مرفوع.")):
        response = await client.post(
            "/api/v1/tutor",
            json=history(("user", "ما هو الفاعل؟")),
            headers=student_headers,
        )
    assert response.status_code == 200
    data = response.json()
    assert data["failed"] is False
    assert data["history"][-1] == {"role": "model", "content": [{"text": "الفاعل اسم مرفوع."}]}


@pytest.mark.asyncio
async def test_tutor_failure_returns_fallback(client, student_headers):
    with patch.object(tutor_service, "ask_tutor", side_effect=TutorUnavailableError()):
        response = await client.post(
            "/api/v1/tutor",
            json=history(("user", "سؤال"), ("model", "جواب"), ("user", "سؤال آخر")),
            headers=student_headers,
        )
    data = response.json()
    assert data["failed"] is True
    assert len(data["history"]) == 4
    assert data["history"][-1]["content"][0]["text"] == tutor_service.FALLBACK_ANSWER


@pytest.mark.asyncio
async def test_tutor_rejects_history_ending_with_model(client, student_headers):
    response = await client.post(
        "/api/v1/tutor",
        json=history(("user", "سؤال"), ("model", "جواب")),
        headers=student_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_tutor_requires_login(client):
    response = await client.post("/api/v1/tutor", json=history(("user", "سؤال")))
    assert response.status_code == 401
