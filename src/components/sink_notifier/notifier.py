"""スプレッドシート（Google Apps Script）への提出内容の送信."""

import logging

import httpx

from src.common.defs.errors import SinkFailure
from src.common.defs.reflection import SinkRecord

logger = logging.getLogger(__name__)


class SinkNotifier:
    """提出内容を外部のスプレッドシートへベストエフォートで送信するクラス.

    送信の失敗は提出サイクル全体を失敗させない. 例外はnotify()の中で捕捉され、
    ログに記録されるだけで呼び出し側には伝播しない.
    """

    def __init__(
        self,
        target_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """SinkNotifierを初期化する.

        Args:
            target_url: 送信先URL. 未設定の場合は送信しない.
            timeout: HTTPリクエストのタイムアウト（秒）
            transport: httpxのトランスポート（テスト用）
        """
        self.target_url = target_url or None
        self.timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        """送信先が設定されているかを返す."""
        return self.target_url is not None

    async def notify(self, record: SinkRecord) -> bool:
        """レコードを送信先に1回だけPOSTする.

        Args:
            record: 送信するレコード

        Returns:
            送信先が受け付けた場合はTrue. 送信先未設定・失敗時はFalse.
        """
        if not self.enabled:
            logger.debug("Sink target is not configured; skipping delivery")
            return False

        try:
            await self._post(record)
        except SinkFailure as e:
            logger.warning("Failed to submit to sink: %s", e)
            return False
        except Exception:
            logger.exception("Unexpected error while submitting to sink")
            return False

        logger.info("Submission delivered to sink")
        return True

    async def _post(self, record: SinkRecord) -> None:
        # 応答本文は読まない. Apps Scriptは成功時に302を返すため3xxも受理とみなす
        body = record.model_dump_json(by_alias=True)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    self.target_url,
                    content=body.encode("utf-8"),
                    headers={"Content-Type": "text/plain"},
                )
        except httpx.HTTPError as e:
            msg = f"{type(e).__name__}: {e}"
            raise SinkFailure(msg) from e

        if response.is_error:
            msg = f"Sink responded with HTTP {response.status_code}"
            raise SinkFailure(msg)
