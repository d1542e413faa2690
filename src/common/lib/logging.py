"""ロギング設定ユーティリティ."""

import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def getLogger(name: str) -> logging.Logger:
    """指定された名前のロガーを取得する.

    呼び出し時にLOG_LEVEL環境変数（デフォルトINFO）のレベルで
    logging.basicConfig()を実行してから、ロガーを返す.

    Args:
        name: ロガー名（通常は__name__を使用）

    Returns:
        ロガーインスタンス
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    return logging.getLogger(name)
