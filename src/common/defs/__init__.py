"""共通の型定義をエクスポートする."""

from src.common.defs.errors import (
    AnalysisError,
    AuthenticationMissing,
    EmptyResponse,
    InputValidationError,
    InvalidStateError,
    MalformedResult,
    ServiceError,
    SinkFailure,
    SubmissionError,
)
from src.common.defs.evaluation import (
    Evaluation,
    OreoAnalysis,
    evaluation_response_schema,
)
from src.common.defs.reflection import (
    ReflectionInput,
    SinkRecord,
    SubmissionSnapshot,
    SubmissionState,
)

__all__ = [
    "AnalysisError",
    "AuthenticationMissing",
    "EmptyResponse",
    "Evaluation",
    "InputValidationError",
    "InvalidStateError",
    "MalformedResult",
    "OreoAnalysis",
    "ReflectionInput",
    "ServiceError",
    "SinkFailure",
    "SinkRecord",
    "SubmissionError",
    "SubmissionSnapshot",
    "SubmissionState",
    "evaluation_response_schema",
]
