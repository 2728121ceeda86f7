from fastapi import APIRouter, HTTPException

from quizcircle.models.schemas import GenerateQuizIn
from quizcircle.services.ai_quiz import generate_quiz_with_ai
from quizcircle.services.quiz_generator import generate_quiz_from_article

router = APIRouter(prefix="/api/generate-quiz", tags=["Quiz generation"])


@router.post("")
async def generate_quiz(payload: GenerateQuizIn):
    if not payload.articleContent:
        raise HTTPException(status_code=400, detail="articleContent is required")

    if payload.useAI:
        questions = await generate_quiz_with_ai(payload.articleContent, payload.numQuestions)
    else:
        questions = generate_quiz_from_article(payload.articleContent, payload.numQuestions)
    return {"questions": questions}
