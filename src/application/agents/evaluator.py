"""振り返り評価エージェントとプロンプト構築の実装."""

import logging
import textwrap
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from src.common.defs.errors import (
    AuthenticationMissing,
    EmptyResponse,
    MalformedResult,
    ServiceError,
)
from src.common.defs.evaluation import Evaluation, OreoAnalysis, evaluation_response_schema
from src.common.defs.reflection import ReflectionInput
from src.components.llm_client.client import LLMClient

logger = logging.getLogger(__name__)

_JSON_TYPE_NAMES: dict[Any, str] = {str: "string", int: "integer", bool: "boolean"}


class EvaluationPromptBuilder:
    """OREO原則による評価プロンプトを構築するビルダー.

    I/Oを行わない純粋な処理で、同じ入力からは常に同じプロンプトを生成する.
    ルーブリックと出力フィールドの説明はEvaluationモデルから取り出すため、
    出力スキーマとプロンプトの内容が食い違うことはない.
    """

    TEMPLATE = textwrap.dedent(
        """
        You are a precise and insightful writing tutor for the student club "Na-Phil-Sa" (My Transcription Club).

        Student Info: {student_info}
        Most Impressive Phrase: "{impressive_phrase}"
        Student's Transcription & Reflection:
        "{content}"

        TASK: Analyze the student's writing based on the OREO principle. Be STRICT in your evaluation.

        The OREO principle consists of four parts:
        {rubric}

        Judge each part strictly. If a part is vague, only implied, or missing, mark it as false.
        Do not give the benefit of the doubt.

        Respond with a single JSON object containing exactly these five fields:
        {fields}
        """
    ).strip()

    def build(self, reflection: ReflectionInput) -> str:
        """振り返り入力から評価用プロンプト文字列を構築する.

        Args:
            reflection: 検証済みの振り返り入力

        Returns:
            構築されたプロンプト文字列
        """
        return self.TEMPLATE.format(
            student_info=reflection.student_info,
            impressive_phrase=reflection.impressive_phrase,
            content=reflection.content,
            rubric=self._format_rubric(),
            fields=self._format_fields(),
        )

    def _format_rubric(self) -> str:
        lines = []
        for name, field in OreoAnalysis.model_fields.items():
            key = field.alias or name
            lines.append(f"- {field.title} [{key}]: {field.description}")
        return "\n".join(lines)

    def _format_fields(self) -> str:
        lines = []
        for i, (name, field) in enumerate(Evaluation.model_fields.items(), start=1):
            key = field.alias or name
            type_name = _JSON_TYPE_NAMES.get(field.annotation, "object")
            lines.append(f"{i}. {key} ({type_name}): {field.description}")
            if field.annotation is OreoAnalysis:
                keys = ", ".join(f.alias or n for n, f in OreoAnalysis.model_fields.items())
                lines.append(f"   Contains one boolean per OREO part: {keys}.")
        return "\n".join(lines)


class AnalysisClient:
    """生成サービスを呼び出して振り返りのEvaluationを得るクライアント.

    1回の呼び出しにつき外部リクエストは1回だけで、リトライは行わない.
    """

    def __init__(
        self,
        llm_client_factory: Callable[[], LLMClient],
        prompt_builder: EvaluationPromptBuilder,
        api_key: str | None,
    ) -> None:
        """AnalysisClientを初期化する.

        Args:
            llm_client_factory: LLMClientを返す呼び出し可能オブジェクト.
                認証情報の確認後に初めて呼び出される.
            prompt_builder: 評価プロンプトビルダー
            api_key: 生成サービスの認証情報
        """
        self.llm_client_factory = llm_client_factory
        self.prompt_builder = prompt_builder
        self.api_key = api_key
        self.response_schema = evaluation_response_schema()

    async def analyze(self, reflection: ReflectionInput) -> Evaluation:
        """振り返りを評価する.

        Args:
            reflection: 検証済みの振り返り入力

        Returns:
            スキーマ検証済みのEvaluation

        Raises:
            AuthenticationMissing: 認証情報が設定されていない場合
            ServiceError: 生成サービスの呼び出しが失敗した場合
            EmptyResponse: 応答にテキストが含まれない場合
            MalformedResult: 応答がスキーマ検証に失敗した場合
        """
        if not (self.api_key or "").strip():
            msg = "No credential is configured for the analysis service"
            raise AuthenticationMissing(msg)

        prompt = self.prompt_builder.build(reflection)
        try:
            llm_client = self.llm_client_factory()
            text = await llm_client.ainvoke_structured_text(prompt, self.response_schema)
        except Exception as e:
            msg = f"Analysis service call failed: {type(e).__name__}"
            raise ServiceError(msg) from e

        if not text or not text.strip():
            msg = "Analysis service returned no text"
            raise EmptyResponse(msg)

        try:
            evaluation = Evaluation.model_validate_json(text)
        except ValidationError as e:
            msg = f"Analysis result does not match the evaluation schema ({e.error_count()} errors)"
            raise MalformedResult(msg) from e

        logger.info("Reflection analyzed (score=%s)", evaluation.score)
        return evaluation
