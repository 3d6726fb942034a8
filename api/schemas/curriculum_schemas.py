"""
Course documents produced by the agents: Curriculum and Assessment.
"""

from typing import Literal, Optional

from pydantic import field_validator, model_validator

from api.schemas.base import CamelModel

DifficultyLevel = Literal["Beginner", "Intermediate", "Advanced"]
LessonType = Literal["Video", "Text", "Quiz", "Assignment"]
AssessmentType = Literal["Quiz", "Assignment"]
QuestionType = Literal["Multiple Choice", "Short Answer"]


class Lesson(CamelModel):
    title: str
    duration: str
    type: LessonType
    objectives: list[str]


class Module(CamelModel):
    title: str
    description: str
    lessons: list[Lesson]


class Curriculum(CamelModel):
    title: str
    description: str
    target_audience: str
    difficulty_level: DifficultyLevel
    estimated_total_duration: str
    modules: list[Module]


class AssessmentQuestion(CamelModel):
    id: int
    text: str
    type: QuestionType
    options: Optional[list[str]] = None
    correct_answer: Optional[str] = None
    points: float


class RubricItem(CamelModel):
    criteria: str
    description: str
    max_points: float


class Assessment(CamelModel):
    """
    A Quiz carries questions and no rubric; an Assignment carries a rubric and
    no questions. Empty lists are treated as absent.
    """

    id: str = ""
    title: str
    target_context: str
    type: AssessmentType
    total_points: float
    questions: Optional[list[AssessmentQuestion]] = None
    rubric: Optional[list[RubricItem]] = None

    @field_validator("questions", "rubric", mode="after")
    @classmethod
    def _empty_as_absent(cls, value):
        return value or None

    @model_validator(mode="after")
    def _check_kind(self) -> "Assessment":
        if self.type == "Quiz":
            if not self.questions:
                raise ValueError("a Quiz needs at least one question")
            if self.rubric:
                raise ValueError("a Quiz cannot carry a rubric")
        else:
            if not self.rubric:
                raise ValueError("an Assignment needs at least one rubric item")
            if self.questions:
                raise ValueError("an Assignment cannot carry questions")
        return self

