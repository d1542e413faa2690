"""提出パイプラインの例外定義."""


class SubmissionError(Exception):
    """提出パイプラインの基底例外."""


class InputValidationError(SubmissionError):
    """必須項目が空のまま提出された場合の例外.

    ネットワークには到達せず、編集状態の中で処理される.
    """

    def __init__(self, missing_fields: list[str]) -> None:
        super().__init__(f"Required fields are empty: {', '.join(missing_fields)}")
        self.missing_fields = missing_fields


class InvalidStateError(SubmissionError):
    """現在の状態では許可されない操作が要求された場合の例外."""

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(f"Cannot {operation} while {state}")
        self.operation = operation
        self.state = state


class SinkFailure(SubmissionError):
    """スプレッドシートへの送信失敗. SinkNotifierの外には伝播しない."""


class AnalysisError(SubmissionError):
    """Analysis Clientが送出する例外の基底クラス."""


class AuthenticationMissing(AnalysisError):
    """生成サービスの認証情報が設定されていない."""


class ServiceError(AnalysisError):
    """生成サービス呼び出しの通信エラー・サービス側エラー."""


class EmptyResponse(AnalysisError):
    """生成サービスがテキストを含まない応答を返した."""


class MalformedResult(AnalysisError):
    """応答がEvaluationスキーマの検証に失敗した."""
