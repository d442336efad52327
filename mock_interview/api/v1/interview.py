from fastapi import APIRouter

from mock_interview.services.question_bank import (
    DEFAULT_DIFFICULTY,
    DEFAULT_GENDER,
    get_questions,
    resolve_difficulty,
)
from mock_interview.utils.enums import Difficulty, InterviewerGender

router = APIRouter()


@router.get("/interview/options")
async def get_interview_options():
    return {
        "difficulties": [d.value for d in Difficulty],
        "genders": [g.value for g in InterviewerGender],
        "default_difficulty": DEFAULT_DIFFICULTY.value,
        "default_gender": DEFAULT_GENDER.value,
    }


@router.get("/questions/{difficulty}")
async def list_questions(difficulty: str):
    resolved = resolve_difficulty(difficulty)
    return {
        "difficulty": resolved.value,
        "questions": [q.model_dump() for q in get_questions(resolved)],
    }
