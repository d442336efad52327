from pydantic import BaseModel, ConfigDict, Field


class InterviewQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    text: str
    reveal_offset_seconds: int = Field(ge=0)
