from fastapi import FastAPI
from contextlib import asynccontextmanager
from infra.database.connection import init_db, close_db
from api.error_handlers import register_error_handlers
from api.routers import songs

# Lifespan event to handle startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()  # songs テーブルとシーケンスの作成 (冪等)
    yield
    close_db()

app = FastAPI(
    title="Music Library API",
    description="API for managing a library of songs",
    version="1.0.0",
    lifespan=lifespan,
)

register_error_handlers(app)

# Root endpoint for health check
@app.get("/")
async def root():
    return {"message": "Music Library API is running"}

# Include Routers
app.include_router(songs.router)
