import uvicorn

from quizcircle.core.config import settings
from quizcircle.main import app


if __name__ == "__main__":
    uvicorn.run(
        "quizcircle.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.ENV == "development",
    )
