# Role: FastAPI app bootstrap. Loads environment config early, configures logging, registers routers,
# and exposes health/docs endpoints.

import logging

from fastapi import FastAPI

import backend.config
backend.config.load_env()

logging.basicConfig(
    level=logging.DEBUG if backend.config.DEBUG else logging.INFO,
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)

from backend.api.chat import router as chat_router

app = FastAPI(title="Search Chat API", version="0.1.0")
app.include_router(chat_router)


@app.get("/")
def root() -> dict:
    # Role: quick discoverability for clients (where are docs/health).
    return {
        "message": "Search Chat API is running",
        "docs": "/docs",
        "health": "/health",
        "chat": "/api/chat",
    }


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "model": backend.config.get_settings().gemini_model}
