from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Any


class GroupSettings(BaseModel):
    rotation_period: int = 7
    max_word_count: int = 1000
    quizzes_enabled: bool = True
    archive_enabled: bool = False
    archive_time_period: Optional[int] = None
    anonymous: bool = False

class JoinGroupIn(BaseModel):
    invite_code: str
    name: str
    topic: Optional[str] = None

class TopicIn(BaseModel):
    group_id: str
    member_id: str
    topic_text: str
    rotation_cycle: int

class RotationIn(BaseModel):
    group_id: str
    rotation_number: int
    assignments: Dict[str, Any]

class ArticleIn(BaseModel):
    group_id: str
    member_id: str
    rotation_number: int
    content: str

class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    question: str
    options: List[str]
    correct_answer: int = Field(alias="correctAnswer")

    @field_validator("options")
    @classmethod
    def _four_options(cls, v: List[str]) -> List[str]:
        if len(v) != 4:
            raise ValueError("a question needs exactly 4 options")
        if len(set(v)) != 4:
            raise ValueError("options must be distinct")
        return v

    @field_validator("correct_answer")
    @classmethod
    def _index_in_range(cls, v: int) -> int:
        if not 0 <= v <= 3:
            raise ValueError("correctAnswer must be between 0 and 3")
        return v

    def to_store(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

class QuizIn(BaseModel):
    articleId: str
    questions: List[QuizQuestion]

class QuizAttemptIn(BaseModel):
    quizId: str
    memberId: str
    answers: List[Optional[int]]
    score: Optional[int] = Field(default=None, ge=0, le=100)

class DemoTimeIn(BaseModel):
    groupId: Optional[str] = None
    skipHours: Optional[float] = None
    skipDays: Optional[float] = None
    reset: bool = False

class GenerateQuizIn(BaseModel):
    articleContent: Optional[str] = None
    numQuestions: int = Field(default=5, ge=1)
    useAI: bool = True
