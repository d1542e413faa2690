"""テスト共通のフィクスチャ."""

import pytest

from src.common.defs.evaluation import Evaluation
from src.common.defs.reflection import ReflectionInput
from tests.fakes import evaluation_json


@pytest.fixture
def evaluation() -> Evaluation:
    return Evaluation.model_validate_json(evaluation_json())


@pytest.fixture
def reflection() -> ReflectionInput:
    return ReflectionInput(
        student_info="1-1 홍길동",
        impressive_phrase="",
        content="오늘 배운 내용은...",
    )
