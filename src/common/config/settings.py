"""アプリケーション設定の管理."""

import os

from pydantic import BaseModel, Field

from src.common.config.app_config_loader import AppConfigLoader

DEFAULT_CONFIG_PATH = "config/app.yaml"


class AnalysisConfig(BaseModel):
    """振り返り評価に使う生成サービスの設定."""

    provider: str = "google"
    model: str = "gemini-2.5-flash"
    api_key: str | None = ""


class SinkConfig(BaseModel):
    """スプレッドシート送信先の設定. urlが空の場合は送信しない."""

    url: str | None = None
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class FormConfig(BaseModel):
    """フォームのタイトル設定."""

    date: str = ""
    title_suffix: str = "나필사"
    description: str = "설문지 설명"


class SubmissionConfig(BaseModel):
    """提出ライフサイクルの設定."""

    recovery_delay_seconds: float = Field(default=3.0, ge=0.0)


class ShareConfig(BaseModel):
    """学生に共有する公開URLの設定."""

    public_url: str = ""


class AppConfig(BaseModel):
    """アプリケーション全体の設定."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    sink: SinkConfig = Field(default_factory=SinkConfig)
    form: FormConfig = Field(default_factory=FormConfig)
    submission: SubmissionConfig = Field(default_factory=SubmissionConfig)
    share: ShareConfig = Field(default_factory=ShareConfig)


# 環境変数名 -> (セクション, キー)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "LLM_PROVIDER": ("analysis", "provider"),
    "LLM_MODEL": ("analysis", "model"),
    "SHEET_URL": ("sink", "url"),
    "SINK_TIMEOUT_SECONDS": ("sink", "timeout_seconds"),
    "FORM_DATE": ("form", "date"),
    "FORM_TITLE_SUFFIX": ("form", "title_suffix"),
    "RECOVERY_DELAY_SECONDS": ("submission", "recovery_delay_seconds"),
    "SHARE_URL": ("share", "public_url"),
}


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    """YAML設定ファイルと環境変数から設定を読み込む.

    YAMLファイルが存在すればその値を基にし、存在しなければデフォルト値を使う.
    その上で環境変数が設定されている項目を上書きする.
    APIキーはGOOGLE_API_KEY、無ければAPI_KEYから読み込む.

    Args:
        config_path: YAML設定ファイルのパス

    Returns:
        アプリケーション設定
    """
    loader = AppConfigLoader(config_path=config_path)
    data = loader.load() if loader.exists() else {}

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None:
            data.setdefault(section, {})[key] = value

    api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY")
    if api_key:
        data.setdefault("analysis", {})["api_key"] = api_key

    return AppConfig.model_validate(data)
