"""提出ライフサイクルを管理するステートマシン."""

import asyncio
import logging
from collections.abc import Callable

from src.application.workflows.submission_workflow import SubmissionWorkflow
from src.common.defs.errors import AnalysisError, InputValidationError, InvalidStateError
from src.common.defs.evaluation import Evaluation
from src.common.defs.reflection import (
    FAILURE_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    ReflectionInput,
    SubmissionSnapshot,
    SubmissionState,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[SubmissionState], None]


def validate_reflection(reflection: ReflectionInput) -> None:
    """必須項目（studentInfo, content）が空でないことを確認する.

    Raises:
        InputValidationError: 必須項目が空の場合
    """
    missing = reflection.missing_fields()
    if missing:
        raise InputValidationError(missing)


class SubmissionOrchestrator:
    """Editing → Submitting → Reviewing | Failed → Editing のステートマシン.

    同時に実行できる提出は1件だけで、Submitting中の提出要求は無視される.
    Failedになった場合はrecovery_delay秒後に、提出前の入力のままEditingへ戻る.
    """

    def __init__(
        self,
        workflow: SubmissionWorkflow,
        form_title_factory: Callable[[], str],
        recovery_delay: float = 3.0,
    ) -> None:
        """SubmissionOrchestratorを初期化する.

        Args:
            workflow: 提出ワークフロー
            form_title_factory: スプレッドシートに記録するフォームタイトルを返す関数.
                生成時、提出時、リセット時に呼び出される.
            recovery_delay: FailedからEditingへ戻るまでの秒数
        """
        self.workflow = workflow
        self.form_title_factory = form_title_factory
        self.form_title = form_title_factory()
        self.recovery_delay = recovery_delay
        self._state = SubmissionState.EDITING
        self._reflection = ReflectionInput()
        self._evaluation: Evaluation | None = None
        self._message: str | None = None
        self._recovery_task: asyncio.Task[None] | None = None
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SubmissionState:
        """現在の状態."""
        return self._state

    @property
    def reflection(self) -> ReflectionInput:
        """現在の振り返り入力."""
        return self._reflection

    @property
    def evaluation(self) -> Evaluation | None:
        """Reviewing中の評価結果. それ以外の状態ではNone."""
        return self._evaluation

    @property
    def message(self) -> str | None:
        """直近の検証メッセージまたはエラーメッセージ."""
        return self._message

    def subscribe(self, listener: StateListener) -> None:
        """状態遷移のたびに呼び出されるリスナーを登録する."""
        self._listeners.append(listener)

    def snapshot(self) -> SubmissionSnapshot:
        """現在の状態のスナップショットを返す."""
        return SubmissionSnapshot(
            state=self._state,
            form_title=self.form_title,
            reflection=self._reflection,
            evaluation=self._evaluation,
            message=self._message,
        )

    def edit(
        self,
        student_info: str | None = None,
        impressive_phrase: str | None = None,
        content: str | None = None,
    ) -> ReflectionInput:
        """入力項目を更新する. Noneの項目は変更しない.

        Raises:
            InvalidStateError: Editing以外の状態で呼び出された場合
        """
        self._require_editing("edit")
        updates = {
            key: value
            for key, value in (
                ("student_info", student_info),
                ("impressive_phrase", impressive_phrase),
                ("content", content),
            )
            if value is not None
        }
        self._reflection = self._reflection.model_copy(update=updates)
        self._message = None
        return self._reflection

    def clear(self) -> None:
        """入力項目をすべて空にする.

        Raises:
            InvalidStateError: Editing以外の状態で呼び出された場合
        """
        self._require_editing("clear")
        self._reflection = ReflectionInput()
        self._message = None

    async def submit(self) -> SubmissionState:
        """現在の入力を提出する.

        Editing以外の状態では何もしない. 必須項目が空の場合は検証メッセージを
        設定してEditingのまま戻る.

        Returns:
            提出後の状態
        """
        if self._state is not SubmissionState.EDITING:
            logger.info("Ignoring submit request while %s", self._state.value)
            return self._state

        reflection = self._reflection
        try:
            validate_reflection(reflection)
        except InputValidationError:
            self._message = REQUIRED_FIELDS_MESSAGE
            return self._state

        self._message = None
        self.form_title = self.form_title_factory()
        self._transition(SubmissionState.SUBMITTING)
        try:
            evaluation = await self.workflow.run(reflection, self.form_title)
        except AnalysisError:
            logger.exception("Submission failed")
            self._fail(reflection)
            return self._state
        except Exception:
            self._fail(reflection)
            raise

        self._evaluation = evaluation
        self._transition(SubmissionState.REVIEWING)
        return self._state

    def reset(self) -> None:
        """評価結果と入力を破棄して新しい入力を開始する.

        Raises:
            InvalidStateError: SubmittingまたはFailedの状態で呼び出された場合
        """
        if self._state in (SubmissionState.SUBMITTING, SubmissionState.FAILED):
            raise InvalidStateError("reset", self._state.value)
        self._reflection = ReflectionInput()
        self._evaluation = None
        self._message = None
        self.form_title = self.form_title_factory()
        self._transition(SubmissionState.EDITING)

    async def wait_for_recovery(self) -> None:
        """Failedからの自動復帰が完了するまで待つ."""
        if self._recovery_task is not None:
            await self._recovery_task

    def _fail(self, reflection: ReflectionInput) -> None:
        self._evaluation = None
        self._message = FAILURE_MESSAGE
        self._transition(SubmissionState.FAILED)
        self._recovery_task = asyncio.create_task(self._recover(reflection))

    async def _recover(self, reflection: ReflectionInput) -> None:
        await asyncio.sleep(self.recovery_delay)
        self._reflection = reflection
        self._message = None
        self._recovery_task = None
        self._transition(SubmissionState.EDITING)

    def _require_editing(self, operation: str) -> None:
        if self._state is not SubmissionState.EDITING:
            raise InvalidStateError(operation, self._state.value)

    def _transition(self, state: SubmissionState) -> None:
        logger.info("Submission state: %s -> %s", self._state.value, state.value)
        self._state = state
        for listener in self._listeners:
            listener(state)
