"""APIリクエスト/レスポンススキーマ."""

from pydantic import BaseModel, ConfigDict, Field


class ReflectionEditRequest(BaseModel):
    """入力項目の更新リクエスト. 省略した項目は変更しない."""

    model_config = ConfigDict(populate_by_name=True)

    student_info: str | None = Field(default=None, alias="studentInfo")
    impressive_phrase: str | None = Field(default=None, alias="impressivePhrase")
    content: str | None = None


class ErrorResponse(BaseModel):
    """エラーレスポンス."""

    detail: str
