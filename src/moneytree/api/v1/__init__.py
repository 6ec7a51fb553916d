"""API version 1 routes."""

from fastapi import APIRouter

from moneytree.api.v1 import auth, categories, summary, transactions

router = APIRouter(prefix="/api/v1")

# Include routers
router.include_router(auth.router)
router.include_router(categories.router)
router.include_router(transactions.router)
router.include_router(summary.router)
