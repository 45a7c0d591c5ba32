from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from comments import router as comments_router
from core import config, db
from core.errors import DatabaseError, database_error_handler
from core.log import configure_logging
from likes import router as likes_router
from posts import router as posts_router
from users import router as users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One pool per process, handed to handlers through db.get_pool.
    app.state.db_pool = await db.create_pool()
    try:
        yield
    finally:
        await db.close_pool(app.state.db_pool)
        app.state.db_pool = None


app = FastAPI(title="Social Media REST API", version="1.0.0", lifespan=lifespan)

app.add_exception_handler(DatabaseError, database_error_handler)

app.include_router(users_router.router, tags=["users"])
app.include_router(posts_router.router, tags=["posts"])
app.include_router(comments_router.router, tags=["comments"])
app.include_router(likes_router.router, tags=["likes"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "social media api"}


def run() -> None:
    configure_logging()
    uvicorn.run(app, host=config.listen_host(), port=config.listen_port(), log_level=config.log_level().lower())


if __name__ == "__main__":
    run()
