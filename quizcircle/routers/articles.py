import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query, status
from starlette.concurrency import run_in_threadpool

from quizcircle.core.config import settings
from quizcircle.core.errors import StoreError
from quizcircle.models.schemas import ArticleIn
from quizcircle.repositories import articles_repo, quizzes_repo
from quizcircle.services.ai_quiz import generate_quiz_with_ai

logger = logging.getLogger("quizcircle.articles")

router = APIRouter(prefix="/api/articles", tags=["Articles"])


async def attach_quiz(article_id: str, content: str):
    """Generate and store the article's quiz. Failures are logged, never raised."""
    try:
        questions = await generate_quiz_with_ai(content, settings.DEFAULT_QUESTION_COUNT, author_focus=True)
        await run_in_threadpool(quizzes_repo.save_quiz, article_id, questions)
        logger.info("Quiz saved for article %s (%d questions)", article_id, len(questions))
    except Exception as e:
        logger.exception("Error generating quiz for article %s: %s", article_id, e)


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_article(payload: ArticleIn, bg: BackgroundTasks):
    try:
        article = articles_repo.submit_article(
            payload.group_id, payload.member_id, payload.rotation_number, payload.content
        )
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
    bg.add_task(attach_quiz, article["id"], payload.content)
    return article


@router.get("")
def list_articles(groupId: Optional[str] = Query(None)):
    if not groupId:
        raise HTTPException(status_code=400, detail="groupId query parameter required")
    try:
        return articles_repo.get_articles(groupId)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{article_id}")
def get_article(article_id: str):
    try:
        return articles_repo.get_article(article_id)
    except StoreError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{article_id}")
def mark_read(article_id: str):
    try:
        return articles_repo.mark_article_read(article_id)
    except StoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
