"""学生の振り返り入力と提出ライフサイクルのデータモデルの定義."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.common.defs.evaluation import Evaluation

REQUIRED_FIELDS_MESSAGE = "필수 항목을 입력해주세요."
FAILURE_MESSAGE = "오류가 발생했습니다. 다시 시도해주세요."


class ReflectionInput(BaseModel):
    """学生が入力する振り返りフォームの内容.

    パイプラインに渡された後は変更されない. 編集は常に新しいインスタンスを生成する.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    student_info: str = Field(default="", alias="studentInfo")
    impressive_phrase: str = Field(default="", alias="impressivePhrase")
    content: str = ""

    def missing_fields(self) -> list[str]:
        """空の必須項目のエイリアス名を返す."""
        missing = []
        if not self.student_info.strip():
            missing.append("studentInfo")
        if not self.content.strip():
            missing.append("content")
        return missing


class SubmissionState(str, Enum):
    """提出ライフサイクルの状態."""

    EDITING = "editing"
    SUBMITTING = "submitting"
    REVIEWING = "reviewing"
    FAILED = "failed"


class SinkRecord(BaseModel):
    """スプレッドシートへ送信する1件分のレコード."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    form_title: str = Field(alias="formTitle")
    student_info: str = Field(alias="studentInfo")
    impressive_phrase: str = Field(alias="impressivePhrase")
    content: str
    timestamp: str

    @classmethod
    def from_reflection(
        cls,
        reflection: ReflectionInput,
        form_title: str,
        timestamp: str,
    ) -> "SinkRecord":
        """振り返り入力とタイトル・タイムスタンプからレコードを生成する."""
        return cls(
            form_title=form_title,
            student_info=reflection.student_info,
            impressive_phrase=reflection.impressive_phrase,
            content=reflection.content,
            timestamp=timestamp,
        )


class SubmissionSnapshot(BaseModel):
    """プレゼンテーション層に公開する提出状態のスナップショット."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    state: SubmissionState
    form_title: str = Field(alias="formTitle")
    reflection: ReflectionInput
    evaluation: Evaluation | None = None
    message: str | None = None
