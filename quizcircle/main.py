import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quizcircle.core.config import settings
from quizcircle.routers import (
    articles, demo_time, generate_quiz, groups, misc, pages, quizzes, rotations, test_join, topics,
)

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("quizcircle")

app = FastAPI(title="QuizCircle API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    problems = [
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    ]
    return JSONResponse({"error": "; ".join(problems) or "Invalid request"}, status_code=400)


app.include_router(groups.router)
app.include_router(topics.router)
app.include_router(rotations.router)
app.include_router(articles.router)
app.include_router(quizzes.router)
app.include_router(demo_time.router)
app.include_router(generate_quiz.router)
app.include_router(test_join.router)
app.include_router(pages.router)
app.include_router(misc.router)

@app.get("/")
def root():
    return {"message": "QuizCircle API"}
