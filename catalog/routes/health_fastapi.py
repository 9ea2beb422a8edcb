# -*- coding: utf-8 -*-
"""
Liveness endpoint.
"""

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health():
    """Reports that the process is up. Does not check the database."""
    return {"status": "healthy"}
