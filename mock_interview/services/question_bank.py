from bisect import bisect_right
from typing import Dict, Optional, Sequence, Tuple

from mock_interview.core.logging_config import get_logger
from mock_interview.schemas.question import InterviewQuestion
from mock_interview.utils.enums import Difficulty, InterviewerGender

logger = get_logger(__name__)

DEFAULT_DIFFICULTY = Difficulty.MEDIUM
DEFAULT_GENDER = InterviewerGender.MALE

QUESTION_BANK: Dict[Difficulty, Tuple[InterviewQuestion, ...]] = {
    Difficulty.EASY: (
        InterviewQuestion(
            id=1,
            text="Tell me about yourself and your background.",
            reveal_offset_seconds=5,
        ),
        InterviewQuestion(
            id=2,
            text="Why are you interested in this position?",
            reveal_offset_seconds=20,
        ),
        InterviewQuestion(
            id=3,
            text="What are your greatest strengths?",
            reveal_offset_seconds=35,
        ),
        InterviewQuestion(
            id=4,
            text="Thank you for your time. Do you have any questions for me?",
            reveal_offset_seconds=50,
        ),
    ),
    Difficulty.MEDIUM: (
        InterviewQuestion(
            id=1,
            text="Describe a challenging project you worked on and how you handled it.",
            reveal_offset_seconds=5,
        ),
        InterviewQuestion(
            id=2,
            text="How do you prioritize tasks when working on multiple projects?",
            reveal_offset_seconds=20,
        ),
        InterviewQuestion(
            id=3,
            text="Tell me about a time you had to work with a difficult team member.",
            reveal_offset_seconds=35,
        ),
        InterviewQuestion(
            id=4,
            text="That's all for today. Do you have any final thoughts or questions?",
            reveal_offset_seconds=50,
        ),
    ),
    Difficulty.HARD: (
        InterviewQuestion(
            id=1,
            text=(
                "Describe a situation where you had to make a critical decision "
                "with incomplete information."
            ),
            reveal_offset_seconds=5,
        ),
        InterviewQuestion(
            id=2,
            text=(
                "How would you approach solving a complex technical problem "
                "that your team has never encountered before?"
            ),
            reveal_offset_seconds=20,
        ),
        InterviewQuestion(
            id=3,
            text=(
                "Tell me about a time when you failed. What did you learn "
                "and how did you apply it?"
            ),
            reveal_offset_seconds=35,
        ),
        InterviewQuestion(
            id=4,
            text="Thank you. Any questions about our company culture or the role?",
            reveal_offset_seconds=50,
        ),
    ),
}


def resolve_difficulty(value: Optional[str]) -> Difficulty:
    """Map a raw query value to a tier, substituting ``medium`` for anything unknown."""
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        logger.debug("Unrecognized difficulty %r, using %s", value, DEFAULT_DIFFICULTY.value)
        return DEFAULT_DIFFICULTY


def resolve_gender(value: Optional[str]) -> InterviewerGender:
    if isinstance(value, InterviewerGender):
        return value
    try:
        return InterviewerGender(str(value).strip().lower())
    except ValueError:
        logger.debug("Unrecognized interviewer gender %r, using %s", value, DEFAULT_GENDER.value)
        return DEFAULT_GENDER


def get_questions(difficulty) -> Tuple[InterviewQuestion, ...]:
    return QUESTION_BANK[resolve_difficulty(difficulty)]


def select_active_question(
    questions: Sequence[InterviewQuestion],
    elapsed_seconds: int,
) -> Optional[InterviewQuestion]:
    """
    Return the question on display after ``elapsed_seconds``.

    That is the last question whose reveal offset has been reached. Before the
    first offset nothing is on display. ``questions`` must be ordered by offset.
    """
    offsets = [q.reveal_offset_seconds for q in questions]
    index = bisect_right(offsets, elapsed_seconds) - 1
    if index < 0:
        return None
    return questions[index]


def questions_revealed(
    questions: Sequence[InterviewQuestion],
    elapsed_seconds: int,
) -> Tuple[InterviewQuestion, ...]:
    return tuple(q for q in questions if q.reveal_offset_seconds <= elapsed_seconds)
