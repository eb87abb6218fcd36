"""
Async A* — Best-first search service
====================================

FastAPI entry point.
Start with:  uvicorn main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from asyncastar.api.routes import router

# ── Logging ────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── App ────────────────────────────────────────────────────────────
app = FastAPI(
    title="Async A*",
    description=(
        "Interruptible best-first (A*) search.  Finds the shortest action "
        "sequence from a start state to any goal state in grid mazes and "
        "graphs, with an optional timeout."
    ),
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount all routes
app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": "Async A*",
        "version": "0.1.0",
        "status": "running",
        "docs": "/docs",
    }
