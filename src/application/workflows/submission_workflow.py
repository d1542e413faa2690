"""LangGraphベースの提出ワークフロー."""

import asyncio
import logging
from typing import TypedDict

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from src.application.agents.evaluator import AnalysisClient
from src.common.defs.evaluation import Evaluation
from src.common.defs.reflection import ReflectionInput, SinkRecord
from src.common.lib.formatting import format_korean_timestamp
from src.components.sink_notifier.notifier import SinkNotifier

logger = logging.getLogger(__name__)


class WorkflowState(TypedDict):
    """ワークフローの状態定義."""

    reflection: ReflectionInput
    form_title: str
    sink_scheduled: bool
    evaluation: Evaluation | None


class SubmissionWorkflow:
    """1回の提出試行を実行するワークフロー.

    スプレッドシートへの送信は切り離されたタスクとして開始するだけで待たず、
    評価の完了だけを待つ. 評価の例外はそのまま呼び出し側に伝播する.
    """

    def __init__(
        self,
        sink_notifier: SinkNotifier,
        analysis_client: AnalysisClient,
    ) -> None:
        """SubmissionWorkflowを初期化する.

        Args:
            sink_notifier: スプレッドシート送信クライアント
            analysis_client: 振り返り評価クライアント
        """
        self.sink_notifier = sink_notifier
        self.analysis_client = analysis_client
        self._pending: set[asyncio.Task[bool]] = set()
        self._graph: CompiledStateGraph | None = None

    @property
    def pending_deliveries(self) -> int:
        """完了していない送信タスクの数を返す."""
        return len(self._pending)

    def build(self) -> CompiledStateGraph:
        """ワークフローグラフを構築・コンパイルする.

        Returns:
            コンパイル済みStateGraph
        """
        graph = StateGraph(WorkflowState)
        graph.add_node("notify_sink", self._notify_sink)
        graph.add_node("analyze", self._analyze)
        graph.set_entry_point("notify_sink")
        graph.add_edge("notify_sink", "analyze")
        graph.add_edge("analyze", END)
        return graph.compile()

    async def run(self, reflection: ReflectionInput, form_title: str) -> Evaluation:
        """提出を1回実行し、評価結果を返す.

        Args:
            reflection: 検証済みの振り返り入力
            form_title: フォームタイトル

        Returns:
            評価結果

        Raises:
            AnalysisError: 評価に失敗した場合
        """
        if self._graph is None:
            self._graph = self.build()
        result = await self._graph.ainvoke(
            {
                "reflection": reflection,
                "form_title": form_title,
                "sink_scheduled": False,
                "evaluation": None,
            }
        )
        return result["evaluation"]

    async def drain(self) -> None:
        """実行中の送信タスクがすべて終わるまで待つ."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def _notify_sink(self, state: WorkflowState) -> dict:
        """送信タスクを開始するノード.

        Args:
            state: ワークフローの状態

        Returns:
            更新された状態のdict
        """
        record = SinkRecord.from_reflection(
            state["reflection"],
            form_title=state["form_title"],
            timestamp=format_korean_timestamp(),
        )
        task = asyncio.create_task(self.sink_notifier.notify(record))
        self._pending.add(task)
        task.add_done_callback(self._on_delivery_done)
        # 評価より先に送信リクエストを開始させる
        await asyncio.sleep(0)
        return {"sink_scheduled": True}

    async def _analyze(self, state: WorkflowState) -> dict:
        """振り返りを評価するノード.

        Args:
            state: ワークフローの状態

        Returns:
            更新された状態のdict
        """
        evaluation = await self.analysis_client.analyze(state["reflection"])
        return {"evaluation": evaluation}

    def _on_delivery_done(self, task: asyncio.Task[bool]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("Sink delivery was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Sink delivery raised unexpectedly", exc_info=exc)
            return
        logger.debug("Sink delivery finished (delivered=%s)", task.result())
