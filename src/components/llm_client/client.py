"""LangChain ChatModelを使用したLLMリクエストクライアント."""

import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage

logger = logging.getLogger(__name__)


def create_chat_model(provider: str, model: str, **kwargs) -> BaseChatModel:  # noqa: ANN003
    """プロバイダ名からChatModelを生成するファクトリ.

    Args:
        provider: プロバイダ名（google / openai）
        model: モデル名
        **kwargs: 追加のキーワード引数（api_keyなど）

    Returns:
        ChatModelインスタンス

    Raises:
        ValueError: 未知のプロバイダが指定された場合
    """
    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(model=model, **kwargs)
    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(model=model, **kwargs)
    msg = f"Unknown provider: {provider}"
    raise ValueError(msg)


def message_text(message: BaseMessage) -> str:
    """応答メッセージのcontentからテキスト部分だけを連結して返す.

    Args:
        message: LLMの応答メッセージ

    Returns:
        テキスト. テキストを含まない場合は空文字列.
    """
    content = message.content
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class LLMClient:
    """LangChainのChatModelをラップするクライアントクラス."""

    def __init__(self, chat_model: BaseChatModel) -> None:
        """LLMClientを初期化する.

        Args:
            chat_model: LangChainのChatModel
        """
        self.chat_model = chat_model

    async def ainvoke_structured_text(self, prompt: str, schema: dict[str, Any]) -> str:
        """出力スキーマを指定してLLMにリクエストを送信し、応答の生テキストを得る.

        パースはLangChainに任せず、呼び出し側が同じスキーマで検証できるように
        include_raw=Trueで生の応答メッセージを取り出す.

        Args:
            prompt: プロンプト文字列
            schema: 出力スキーマ（JSONスキーマのdict）

        Returns:
            LLMの応答テキスト

        Raises:
            Exception: LLMリクエストが失敗した場合
        """
        messages: list[BaseMessage] = [HumanMessage(content=prompt)]
        try:
            structured_llm = self.chat_model.with_structured_output(
                schema,
                method="json_schema",
                include_raw=True,
            )
            result = await structured_llm.ainvoke(messages)
        except Exception:
            logger.exception("Structured LLM request failed")
            raise
        return message_text(result["raw"])
