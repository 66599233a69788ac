"""API routes."""

from fastapi import APIRouter

from askboard.routes import questions

api_router = APIRouter()

# Question list/detail/CRUD endpoints
api_router.include_router(questions.router, prefix="/v1/questions", tags=["questions"])
