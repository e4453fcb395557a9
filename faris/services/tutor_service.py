import asyncio
import json
import logging
import os

from google import genai
from google.genai import types

from faris.core.config import settings
from faris.exceptions import TutorUnavailableError
from faris.schemas.tutor import TutorAnswer, TutorTextPart, TutorTurn

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "عذراً، حدث خطأ أثناء معالجة طلبك. يرجى المحاولة مرة أخرى."

PROMPT_TEMPLATE = """You are the AI assistant of the "فارس اللغة العربية" platform, supervised by Dr. Sayed Hashmat Abu Farghal. You help students with Arabic grammar (Nahw), morphology (Sarf), rhetoric (Balagha), literature (Adab) and criticism (Naqd), following his teaching.

Rules:
- Always answer in Arabic, clearly, simply and encouragingly.
- Give a direct, accurate answer; illustrate with examples from the Quran or classical poetry when useful.
- Address the user as "عزيزي الطالب" or "عزيزتي الطالبة".
- If the question is not about the Arabic language, politely say that your expertise is Arabic language and literature.
- Structure the answer with markdown (bold key terms, bullet lists).

Conversation so far. Write the next model turn.

{transcript}
- model:

Respond as JSON:
{{"answer": "..."}}"""

_gemini_client: genai.Client | None = None


def get_gemini_client() -> genai.Client:
    """Gemini client singleton"""
    global _gemini_client
    if _gemini_client is None:
        api_key = settings.gemini_api_key or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise TutorUnavailableError("لم يتم إعداد مفتاح المساعد الذكي.")
        _gemini_client = genai.Client(api_key=api_key)
    return _gemini_client


def render_prompt(history: list[TutorTurn]) -> str:
    transcript = "\n".join(f"- {turn.role}: {turn.text}" for turn in history)
    return PROMPT_TEMPLATE.format(transcript=transcript)


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


async def ask_tutor(history: list[TutorTurn]) -> TutorAnswer:
    """Send the whole transcript to Gemini and parse {"answer": ...}"""
    client = get_gemini_client()
    prompt = render_prompt(history)

    try:
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(
            None,
            lambda: client.models.generate_content(
                model=settings.gemini_model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=0.7,
                    response_mime_type="application/json",
                ),
            ),
        )
        if not response.text:
            raise ValueError("empty response")
        data = json.loads(_strip_code_fence(response.text))
        answer = TutorAnswer(**data)
    except Exception as e:
        logger.error(f"Tutor request failed: {type(e).__name__}: {e}")
        raise TutorUnavailableError()

    return answer


async def reply(history: list[TutorTurn]) -> tuple[list[TutorTurn], bool]:
    """Append the model turn (or the fallback text) to the transcript

    Returns the new transcript and whether the tutor call failed.
    """
    failed = False
    try:
        answer = (await ask_tutor(history)).answer
    except TutorUnavailableError:
        answer = FALLBACK_ANSWER
        failed = True

    model_turn = TutorTurn(role="model", content=[TutorTextPart(text=answer)])
    return [*history, model_turn], failed
