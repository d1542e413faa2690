"""AIによる振り返り評価のデータモデルの定義.

このモデルは生成サービスへ渡す出力スキーマと、応答の検証の両方に使われる.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OreoAnalysis(BaseModel):
    """OREO原則の4要素それぞれに対する判定.

    各要素は独立しており、要素間に順序や依存関係はない.
    """

    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)

    opinion: bool = Field(
        title="Opinion",
        description="The main argument or central thought is clearly stated",
    )
    reason: bool = Field(
        title="Reason",
        description="A logical reason is given for why the student thinks so",
    )
    example: bool = Field(
        title="Example",
        description="A specific example from the text or personal experience supports the reason",
    )
    opinion_restated: bool = Field(
        alias="opinionRestated",
        title="Opinion restated",
        description="The opinion is restated, or a concluding thought or suggestion is offered at the end",
    )


class Evaluation(BaseModel):
    """振り返りに対する構造化された評価結果.

    strictモードで検証するため、型の異なる値は変換されずに拒否される.
    scoreの0〜100という範囲はプロンプトで指示するだけで、ここでは検証しない.
    """

    model_config = ConfigDict(strict=True, frozen=True, populate_by_name=True)

    summary: str = Field(
        description="A one-sentence summary of what the student wrote, in Korean",
    )
    oreo_analysis: OreoAnalysis = Field(
        alias="oreoAnalysis",
        description="Strict OREO judgement: a part is false when it is weak, vague, implicit or missing",
    )
    score: int = Field(
        description="Score out of 100 for logical flow and sincerity, with points deducted for missing OREO parts",
    )
    constructive_feedback: str = Field(
        alias="constructiveFeedback",
        description="Specific advice in Korean explaining which OREO part was weak and how to fix it",
    )
    encouragement: str = Field(
        description="A warm, motivating closing comment in Korean",
    )


def _inline_refs(node: Any, defs: dict[str, Any]) -> Any:  # noqa: ANN401
    """$refと単一要素のallOfを展開した自己完結したスキーマを返す."""
    if isinstance(node, list):
        return [_inline_refs(item, defs) for item in node]
    if not isinstance(node, dict):
        return node

    if "$ref" in node:
        name = node["$ref"].rsplit("/", 1)[-1]
        siblings = {k: v for k, v in node.items() if k != "$ref"}
        return {**_inline_refs(defs[name], defs), **siblings}
    if "allOf" in node and len(node["allOf"]) == 1:
        siblings = {k: v for k, v in node.items() if k != "allOf"}
        return {**_inline_refs(node["allOf"][0], defs), **siblings}

    return {k: _inline_refs(v, defs) for k, v in node.items() if k != "$defs"}


def evaluation_response_schema() -> dict[str, Any]:
    """生成サービスに渡す出力形状の制約をEvaluationモデルから生成する.

    Returns:
        $defsを含まないJSONスキーマ（フィールド名はcamelCase）
    """
    schema = Evaluation.model_json_schema(by_alias=True)
    inlined = _inline_refs(schema, schema.get("$defs", {}))
    # クラスのdocstringはモデルへの指示に含めない
    inlined.pop("description", None)
    return inlined
