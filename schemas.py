from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Literal, Optional, Union


class CamelModel(BaseModel):
    # Results go back to the frontend as camelCase (isCorrect, totalItems, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# -----------------------------
#  Diff segments
# -----------------------------
class Correct(CamelModel):
    type: Literal["correct"] = "correct"
    text: str

class Wrong(CamelModel):
    type: Literal["wrong"] = "wrong"
    text: str        # what the learner typed
    expected: str    # what the reference says

class Missing(CamelModel):
    type: Literal["missing"] = "missing"
    text: str

class Extra(CamelModel):
    type: Literal["extra"] = "extra"
    text: str

DiffSegment = Annotated[Union[Correct, Wrong, Missing, Extra], Field(discriminator="type")]


# -----------------------------
#  Comparison results
# -----------------------------
class DictationOptions(CamelModel):
    strict_case: bool = False
    strict_punctuation: bool = False

class ProgressRecord(CamelModel):
    is_correct: bool
    accuracy: float

class DictationResult(CamelModel):
    is_correct: bool
    accuracy: float = Field(ge=0, le=100)
    diff: List[DiffSegment] = Field(default_factory=list)

    def to_progress(self) -> ProgressRecord:
        """Payload handed to the progress-recording collaborator."""
        return ProgressRecord(is_correct=self.is_correct, accuracy=self.accuracy)

class DictationSummary(CamelModel):
    total_items: int
    correct_count: int
    total_accuracy: int

class AnswerCheckResult(CamelModel):
    is_correct: bool
    similarity: float = Field(ge=0, le=1)
    feedback: str


# -----------------------------
#  Request bodies
# -----------------------------
class DictationCompare(CamelModel):
    text: str
    expected: str
    strict_case: Optional[bool] = None
    strict_punctuation: Optional[bool] = None

class DictationSubmit(BaseModel):
    user_id: str
    task_id: int
    sentence_id: int
    expected: str
    text: str

class DictationSubmitOut(BaseModel):
    result: DictationResult
    recorded: bool

class AnswerCheck(CamelModel):
    text: str
    expected: str
    threshold: Optional[float] = Field(default=None, ge=0, le=1)

class SummaryRequest(BaseModel):
    results: List[DictationResult] = Field(default_factory=list)

class HintOut(BaseModel):
    hint: str
