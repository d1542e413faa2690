"""LLMClientとChatModelファクトリのテスト."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from src.components.llm_client.client import LLMClient, create_chat_model, message_text


# ---------------------------------------------------------------------------
# create_chat_model
# ---------------------------------------------------------------------------


def test_create_chat_model_google():
    """googleプロバイダはChatGoogleGenerativeAIを生成する."""
    with patch("langchain_google_genai.ChatGoogleGenerativeAI") as chat_cls:
        model = create_chat_model("google", "gemini-2.5-flash", api_key="secret")

    chat_cls.assert_called_once_with(model="gemini-2.5-flash", api_key="secret")
    assert model is chat_cls.return_value


def test_create_chat_model_openai():
    """openaiプロバイダはChatOpenAIを生成する."""
    with patch("langchain_openai.ChatOpenAI") as chat_cls:
        model = create_chat_model("openai", "gpt-4.1-mini", api_key="secret")

    chat_cls.assert_called_once_with(model="gpt-4.1-mini", api_key="secret")
    assert model is chat_cls.return_value


def test_create_chat_model_unknown_provider():
    """未知のプロバイダ名ではValueErrorが発生する."""
    with pytest.raises(ValueError, match="Unknown provider: bedrock"):
        create_chat_model("bedrock", "any-model")


# ---------------------------------------------------------------------------
# message_text
# ---------------------------------------------------------------------------


def test_message_text_from_string_content():
    assert message_text(AIMessage(content='{"score": 1}')) == '{"score": 1}'


def test_message_text_joins_text_parts():
    """テキスト以外のパートは無視してテキストだけを連結する."""
    message = AIMessage(
        content=[
            {"type": "text", "text": '{"summary": '},
            {"type": "image_url", "image_url": {"url": "https://example.com/x.png"}},
            '"ok"}',
        ]
    )
    assert message_text(message) == '{"summary": "ok"}'


def test_message_text_empty_content():
    assert message_text(AIMessage(content="")) == ""
    assert message_text(AIMessage(content=[])) == ""


# ---------------------------------------------------------------------------
# LLMClient.ainvoke_structured_text
# ---------------------------------------------------------------------------


def _chat_model(result: object = None, error: Exception | None = None) -> tuple[MagicMock, MagicMock]:
    structured = MagicMock()
    structured.ainvoke = AsyncMock(return_value=result, side_effect=error)
    chat_model = MagicMock()
    chat_model.with_structured_output.return_value = structured
    return chat_model, structured


@pytest.mark.asyncio
async def test_ainvoke_structured_text_returns_raw_text():
    """スキーマ付きでリクエストし、生の応答テキストを返す."""
    schema = {"title": "Evaluation", "type": "object", "properties": {}}
    raw = AIMessage(content='{"summary": "x"}')
    chat_model, structured = _chat_model(result={"raw": raw, "parsed": None, "parsing_error": None})

    text = await LLMClient(chat_model).ainvoke_structured_text("prompt text", schema)

    assert text == '{"summary": "x"}'
    chat_model.with_structured_output.assert_called_once_with(
        schema,
        method="json_schema",
        include_raw=True,
    )
    structured.ainvoke.assert_awaited_once_with([HumanMessage(content="prompt text")])


@pytest.mark.asyncio
async def test_ainvoke_structured_text_propagates_failure():
    """リクエストの失敗はそのまま送出される."""
    chat_model, _ = _chat_model(error=ConnectionError("network down"))

    with pytest.raises(ConnectionError, match="network down"):
        await LLMClient(chat_model).ainvoke_structured_text("prompt", {})
