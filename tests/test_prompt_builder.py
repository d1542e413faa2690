"""EvaluationPromptBuilderのテスト."""

from hypothesis import given, settings
from hypothesis import strategies as st

from src.application.agents.evaluator import EvaluationPromptBuilder
from src.common.defs.evaluation import Evaluation, OreoAnalysis
from src.common.defs.reflection import ReflectionInput


def _build(**fields: str) -> str:
    return EvaluationPromptBuilder().build(ReflectionInput(**fields))


def test_restates_input_fields_verbatim():
    """3つの入力項目がそのままプロンプトに含まれる."""
    prompt = _build(
        student_info="1-1 홍길동",
        impressive_phrase="천천히 가도 멈추지만 않으면 된다",
        content="오늘 배운 내용은...\n두 번째 줄 {중괄호}도 그대로",
    )

    assert "Student Info: 1-1 홍길동" in prompt
    assert 'Most Impressive Phrase: "천천히 가도 멈추지만 않으면 된다"' in prompt
    assert '"오늘 배운 내용은...\n두 번째 줄 {중괄호}도 그대로"' in prompt


def test_empty_impressive_phrase_is_rendered_as_empty_quotes():
    """任意項目が空でも項目自体は省略されない."""
    prompt = _build(student_info="1-1 홍길동", content="내용")
    assert 'Most Impressive Phrase: ""' in prompt


def test_names_each_rubric_part_with_definition():
    """OREOの4要素が名前と定義付きで列挙される."""
    prompt = _build(student_info="a", content="b")

    for title in ("Opinion", "Reason", "Example", "Opinion restated"):
        assert f"- {title} [" in prompt
    for field in OreoAnalysis.model_fields.values():
        assert field.description in prompt


def test_instructs_strict_grading():
    """曖昧・暗黙・欠落の要素はfalseとするよう指示する."""
    prompt = _build(student_info="a", content="b")

    assert "Be STRICT" in prompt
    assert "vague, only implied, or missing, mark it as false" in prompt
    assert "Do not give the benefit of the doubt" in prompt


def test_enumerates_exactly_the_five_output_fields():
    """出力フィールド5つがスキーマと同じ名前・順序・説明で列挙される."""
    prompt = _build(student_info="a", content="b")

    expected = [
        ("summary", "string"),
        ("oreoAnalysis", "object"),
        ("score", "integer"),
        ("constructiveFeedback", "string"),
        ("encouragement", "string"),
    ]
    for i, (key, type_name) in enumerate(expected, start=1):
        assert f"{i}. {key} ({type_name}): " in prompt
    assert "6. " not in prompt
    for field in Evaluation.model_fields.values():
        assert field.description in prompt
    assert "opinion, reason, example, opinionRestated" in prompt


def test_build_is_deterministic():
    """同じ入力からは常に同じプロンプトが生成される."""
    reflection = ReflectionInput(student_info="1-1 홍길동", content="오늘 배운 내용은...")
    builder = EvaluationPromptBuilder()
    assert builder.build(reflection) == builder.build(reflection)
    assert builder.build(reflection) == EvaluationPromptBuilder().build(reflection)


@given(
    student_info=st.text(min_size=1, max_size=50),
    content=st.text(min_size=1, max_size=5000),
)
@settings(max_examples=50)
def test_never_truncates_student_text(student_info, content):
    """学生の文章は長さにかかわらず切り詰められない."""
    prompt = _build(student_info=student_info, content=content)
    assert f'"{content}"' in prompt
    assert f"Student Info: {student_info}" in prompt
