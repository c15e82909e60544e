"""
Task Graph Backend - FastAPI entry point.
Serves dependency graph layouts and highlight relations to the operations console.
"""

import os
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from api import register_routes

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

logger.remove()
logger.add(sys.stderr, level=LOG_LEVEL)

app = FastAPI(title="Task Graph Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_routes(app)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.environ.get("PORT", "3001")))
