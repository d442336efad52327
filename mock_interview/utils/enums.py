from enum import Enum


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class InterviewerGender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class SessionPhase(str, Enum):
    INITIALIZING = "initializing"
    ACTIVE = "active"
    COMPLETED = "completed"


class CompletionReason(str, Enum):
    EXPIRED = "expired"
    ENDED = "ended"
    ABANDONED = "abandoned"


class TrackKind(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"
