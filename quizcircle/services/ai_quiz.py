import json
import logging
import re
from typing import Any, Dict, List

import httpx
from pydantic import ValidationError

from quizcircle.core.config import settings
from quizcircle.models.schemas import QuizQuestion
from quizcircle.prompts.quiz_prompts import AUTHOR_FOCUS, QUIZ_GENERATION_TEMPLATE
from quizcircle.services.quiz_generator import generate_quiz_from_article

logger = logging.getLogger("quizcircle.ai_quiz")

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


def build_quiz_prompt(content: str, num_questions: int, author_focus: bool = False) -> str:
    return QUIZ_GENERATION_TEMPLATE.format(
        n=num_questions,
        content=content,
        focus=AUTHOR_FOCUS if author_focus else "",
    )


def parse_ai_questions(raw: str) -> List[Dict[str, Any]]:
    """Well-formed questions from the model's reply, or [] if there are none."""
    text = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", (raw or "").strip())).strip()
    try:
        data = json.loads(text)
    except ValueError:
        logger.warning("AI quiz reply is not valid JSON")
        return []
    if isinstance(data, dict):
        data = data.get("questions")
    if not isinstance(data, list):
        return []

    out: List[Dict[str, Any]] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            continue
        item = {**item, "id": str(item.get("id") or f"q{i + 1}")}
        try:
            out.append(QuizQuestion.model_validate(item).to_store())
        except ValidationError as e:
            logger.info("Dropping malformed AI question %d: %s", i, e.errors()[:1])
    return out


async def _request_questions(content: str, num_questions: int, author_focus: bool) -> List[Dict[str, Any]]:
    payload = {"contents": [{"parts": [{"text": build_quiz_prompt(content, num_questions, author_focus)}]}]}
    async with httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT_SECONDS) as client:
        r = await client.post(
            GEMINI_URL.format(model=settings.GEMINI_MODEL),
            params={"key": settings.GEMINI_API_KEY},
            json=payload,
        )
    if not r.is_success:
        logger.warning("Gemini returned %s; using algorithm-based generation", r.status_code)
        return []
    body = r.json()
    text = body["candidates"][0]["content"]["parts"][0]["text"]
    return parse_ai_questions(text)[:num_questions]


async def generate_quiz_with_ai(content: str, num_questions: int = 5, author_focus: bool = False) -> List[Dict[str, Any]]:
    """Ask Gemini for a quiz; fall back to the sentence-blanking generator.

    Never raises: a missing key, network failure, non-2xx reply, unparseable
    payload or empty result all end in generate_quiz_from_article().
    """
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set; using algorithm-based generation")
        return generate_quiz_from_article(content, num_questions)

    try:
        questions = await _request_questions(content, num_questions, author_focus)
    except Exception as e:
        logger.warning("Gemini quiz generation failed (%s); using algorithm-based generation", e)
        questions = []

    if not questions:
        return generate_quiz_from_article(content, num_questions)
    logger.info("Generated %d questions with Gemini", len(questions))
    return questions
