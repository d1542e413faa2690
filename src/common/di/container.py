"""依存性注入コンテナの定義."""

from dependency_injector import containers, providers

from src.application.agents.evaluator import AnalysisClient, EvaluationPromptBuilder
from src.application.workflows.submission_orchestrator import SubmissionOrchestrator
from src.application.workflows.submission_workflow import SubmissionWorkflow
from src.common.lib.formatting import build_form_title, today_iso
from src.components.llm_client.client import LLMClient, create_chat_model
from src.components.sink_notifier.notifier import SinkNotifier


def resolve_form_title(date: str | None, title_suffix: str) -> str:
    """設定の日付（未設定なら今日）と活動名からフォームタイトルを返す."""
    return build_form_title(date or today_iso(), title_suffix)


class Container(containers.DeclarativeContainer):
    """アプリケーション全体のDIコンテナ."""

    config = providers.Configuration()

    # ChatModelは認証情報の確認後、最初の評価時に生成される
    chat_model = providers.Singleton(
        create_chat_model,
        provider=config.analysis.provider,
        model=config.analysis.model,
        api_key=config.analysis.api_key,
    )

    llm_client = providers.Singleton(
        LLMClient,
        chat_model=chat_model,
    )

    prompt_builder = providers.Singleton(EvaluationPromptBuilder)

    analysis_client = providers.Singleton(
        AnalysisClient,
        llm_client_factory=llm_client.provider,
        prompt_builder=prompt_builder,
        api_key=config.analysis.api_key,
    )

    sink_notifier = providers.Singleton(
        SinkNotifier,
        target_url=config.sink.url,
        timeout=config.sink.timeout_seconds,
    )

    submission_workflow = providers.Singleton(
        SubmissionWorkflow,
        sink_notifier=sink_notifier,
        analysis_client=analysis_client,
    )

    form_title = providers.Callable(
        resolve_form_title,
        date=config.form.date,
        title_suffix=config.form.title_suffix,
    )

    submission_orchestrator = providers.Singleton(
        SubmissionOrchestrator,
        workflow=submission_workflow,
        form_title_factory=form_title.provider,
        recovery_delay=config.submission.recovery_delay_seconds,
    )
