# Copyright © 2025 Phaethon Order LLC. All rights reserved. Provided solely for evaluation. See LICENSE.

import os
from typing import Any, Dict, List

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from database import models  # noqa: F401
from database.session import Base, SessionLocal, engine
from svc.source_models import CitationRecord
from svc.source_parser import parse_source_field_async
from utils.logger import setup_logger
from verifiers.reference_resolver import ReferenceResolver, build_reference_resolver

load_dotenv()

logger = setup_logger()


class ParseSourceRequest(BaseModel):
    source: str
    resolve: bool = True


class ParseSourceResponse(BaseModel):
    sources: List[CitationRecord]
    termbase_sources: List[Dict[str, Any]]


app = FastAPI(title="iev-source-parser", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_resolver: ReferenceResolver | None = None


@app.on_event("startup")
def on_startup() -> None:
    global _resolver
    Base.metadata.create_all(bind=engine)
    _resolver = build_reference_resolver(SessionLocal)


def get_resolver() -> ReferenceResolver | None:
    return _resolver


@app.get("/api/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint that reports configuration."""
    return {
        "status": "ok",
        "registry_configured": bool(os.getenv("REFERENCE_REGISTRY_URL")),
        "database_configured": bool(os.getenv("DATABASE_URL")),
    }


@app.post("/api/sources/parse", response_model=ParseSourceResponse)
async def parse_source(
    payload: ParseSourceRequest,
    resolver: ReferenceResolver | None = Depends(get_resolver),
) -> ParseSourceResponse:
    if not payload.source or not payload.source.strip():
        logger.error("Received an empty source field.")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Source field cannot be empty.")

    try:
        records = await parse_source_field_async(payload.source, resolver if payload.resolve else None)
    except ValueError as exc:
        logger.error(f"Error in parse_source_field: {exc}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Parsed %d citation(s) from source field", len(records))
    return ParseSourceResponse(
        sources=records,
        termbase_sources=[record.to_source_dict() for record in records],
    )
