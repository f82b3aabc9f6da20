from typing import List, Literal

from pydantic import BaseModel, Field, StrictStr


MAX_TEXT_LENGTH = 2000


class ScoreRequest(BaseModel):
    expected: StrictStr = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH)
    transcript: StrictStr = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH)


class ScoreBreakdown(BaseModel):
    overall: int = Field(ge=0, le=100)
    pronunciation: int = Field(ge=0, le=100)
    tone: int = Field(ge=0, le=100)


class ScoreResponse(BaseModel):
    success: Literal[True] = True
    scores: ScoreBreakdown
    feedback: str


class FieldErrorItem(BaseModel):
    type: Literal["field"] = "field"
    location: str = "body"
    path: str
    reason: Literal["missing", "not_a_string", "empty", "too_long", "invalid"]
    msg: str


class ValidationErrorResponse(BaseModel):
    success: Literal[False] = False
    message: str = "Validation failed"
    errors: List[FieldErrorItem]


class ErrorResponse(BaseModel):
    success: Literal[False] = False
    message: str


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: str
    environment: str


class RootResponse(BaseModel):
    message: str
    version: str
    documentation: str
    health: str
