"""app.yaml設定ファイルの読み込み."""

import os
from pathlib import Path
from typing import Any

import yaml


class AppConfigLoader:
    """app.yaml設定ファイルを読み込むローダー."""

    def __init__(self, config_path: str = "config/app.yaml") -> None:
        """AppConfigLoaderを初期化する.

        Args:
            config_path: 設定ファイルのパス
        """
        self.config_path = Path(config_path)

    def exists(self) -> bool:
        """設定ファイルが存在するかを返す."""
        return self.config_path.exists()

    def load(self) -> dict[str, Any]:
        """YAMLを読み込み、_envフィールドを解決したdictを返す.

        Raises:
            FileNotFoundError: 設定ファイルが存在しない場合
            yaml.YAMLError: YAMLの構文が不正な場合
        """
        if not self.exists():
            msg = f"設定ファイルが見つからない: {self.config_path}"
            raise FileNotFoundError(msg)
        data = yaml.safe_load(self.config_path.read_text(encoding="utf-8")) or {}
        return {
            section: resolve_env_vars(values) if isinstance(values, dict) else values
            for section, values in data.items()
        }


def resolve_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """_envサフィックスのフィールドを環境変数で解決する.

    未設定の環境変数はNoneとして解決される.
    """
    resolved = {}
    for key, value in config.items():
        if key.endswith("_env"):
            resolved[key.removesuffix("_env")] = os.getenv(str(value))
        else:
            resolved[key] = value
    return resolved
