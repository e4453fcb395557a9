"""Tutor Service tests"""
from unittest.mock import MagicMock, patch

import pytest

from faris.exceptions import TutorUnavailableError
from faris.schemas.tutor import TutorTextPart, TutorTurn
from faris.services import tutor_service


def turn(role: str, text: str) -> TutorTurn:
    return TutorTurn(role=role, content=[TutorTextPart(text=text)])


@pytest.fixture
def history():
    return [
        turn("user", "ما هو المبتدأ؟"),
        turn("model", "المبتدأ اسم مرفوع تبدأ به الجملة الاسمية."),
        turn("user", "أعطني مثالاً"),
    ]


@pytest.fixture
def mock_client():
    client = MagicMock()
    response = MagicMock()
    response.text = '```json\n{"answer": "**العلمُ** نورٌ"}\n```'
    client.models.generate_content.return_value = response
    return client


def test_render_prompt_lists_turns(history):
    prompt = tutor_service.render_prompt(history)
    assert "- user: ما هو المبتدأ؟" in prompt
    assert "- model: المبتدأ اسم مرفوع" in prompt
    assert prompt.index("- user: أعطني مثالاً") < prompt.rindex("- model:")
    assert '{"answer": "..."}' in prompt


@pytest.mark.asyncio
async def test_reply_appends_model_turn(history, mock_client):
    with patch.object(tutor_service, "get_gemini_client", return_value=mock_client):
        new_history, failed = await tutor_service.reply(history)

    assert failed is False
    assert len(new_history) == 4
    assert new_history[-1].role == "model"
    assert new_history[-1].text == "**العلمُ** نورٌ"
    assert new_history[:3] == history
    kwargs = mock_client.models.generate_content.call_args.kwargs
    assert kwargs["config"].response_mime_type == "application/json"


@pytest.mark.asyncio
async def test_reply_falls_back_on_failure(history, mock_client):
    mock_client.models.generate_content.side_effect = RuntimeError("quota")
    with patch.object(tutor_service, "get_gemini_client", return_value=mock_client):
        new_history, failed = await tutor_service.reply(history)

    assert failed is True
    assert new_history[-1].text == tutor_service.FALLBACK_ANSWER


@pytest.mark.asyncio
async def test_ask_tutor_rejects_malformed_json(history, mock_client):
    mock_client.models.generate_content.return_value.text = "not json"
    with patch.object(tutor_service, "get_gemini_client", return_value=mock_client):
        with pytest.raises(TutorUnavailableError):
            await tutor_service.ask_tutor(history)


def test_client_requires_api_key(monkeypatch):
    monkeypatch.setattr(tutor_service, "_gemini_client", None)
    monkeypatch.setattr(tutor_service.settings, "gemini_api_key", None)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(TutorUnavailableError):
        tutor_service.get_gemini_client()
