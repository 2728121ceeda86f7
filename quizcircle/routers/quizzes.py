from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from quizcircle.core.errors import StoreError
from quizcircle.models.schemas import QuizAttemptIn, QuizIn
from quizcircle.repositories import quizzes_repo
from quizcircle.services.quiz_generator import score_quiz

router = APIRouter(prefix="/api/quizzes", tags=["Quizzes"])


@router.post("", status_code=status.HTTP_201_CREATED)
def save_quiz(payload: QuizIn):
    try:
        return quizzes_repo.save_quiz(payload.articleId, [q.to_store() for q in payload.questions])
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("")
def get_quiz(articleId: Optional[str] = Query(None)):
    if not articleId:
        raise HTTPException(status_code=400, detail="articleId query parameter required")
    try:
        return quizzes_repo.get_quiz(articleId)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("", status_code=status.HTTP_201_CREATED)
def save_attempt(payload: QuizAttemptIn):
    try:
        score = payload.score
        if score is None:
            quiz = quizzes_repo.get_quiz_by_id(payload.quizId)
            score = score_quiz(payload.answers, quiz.get("questions") or [])
        return quizzes_repo.save_quiz_attempt(payload.quizId, payload.memberId, payload.answers, score)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/attempts")
def list_attempts(articleId: Optional[str] = Query(None)):
    if not articleId:
        raise HTTPException(status_code=400, detail="articleId query parameter required")
    try:
        return quizzes_repo.get_quiz_attempts_for_article(articleId)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
