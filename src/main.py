"""FastAPIアプリケーションのエントリポイント."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from src.application.workflows.submission_orchestrator import SubmissionOrchestrator
from src.common.config.settings import load_config
from src.common.defs.errors import InvalidStateError
from src.common.defs.reflection import SubmissionState
from src.common.di.container import Container
from src.common.lib.logging import getLogger
from src.common.schema.api import ErrorResponse, ReflectionEditRequest
from src.components.share_link.links import ShareLink, build_share_link

logger = getLogger(__name__)

router = APIRouter()


def _orchestrator(request: Request) -> SubmissionOrchestrator:
    container: Container = request.app.state.container
    return container.submission_orchestrator()


def _snapshot_body(orchestrator: SubmissionOrchestrator) -> dict:
    return orchestrator.snapshot().model_dump(mode="json", by_alias=True)


@router.get("/health")
def health() -> dict[str, str]:
    """ヘルスチェックエンドポイント.

    Returns:
        ステータス情報
    """
    return {"status": "ok"}


@router.get("/submission")
async def get_submission(request: Request) -> dict:
    """現在の提出状態を返す."""
    return _snapshot_body(_orchestrator(request))


@router.put("/submission/input", responses={409: {"model": ErrorResponse}})
async def edit_submission_input(request: Request, body: ReflectionEditRequest) -> dict:
    """入力項目を更新する."""
    orchestrator = _orchestrator(request)
    try:
        orchestrator.edit(
            student_info=body.student_info,
            impressive_phrase=body.impressive_phrase,
            content=body.content,
        )
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return _snapshot_body(orchestrator)


@router.delete("/submission/input", responses={409: {"model": ErrorResponse}})
async def clear_submission_input(request: Request) -> dict:
    """入力項目をすべて空にする."""
    orchestrator = _orchestrator(request)
    try:
        orchestrator.clear()
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return _snapshot_body(orchestrator)


@router.post("/submission")
async def submit(request: Request) -> JSONResponse:
    """現在の入力を提出し、評価結果を含む状態を返す.

    必須項目が空の場合は422を返す（状態はEditingのまま）.
    """
    orchestrator = _orchestrator(request)
    was_editing = orchestrator.state is SubmissionState.EDITING
    state = await orchestrator.submit()
    status_code = 200
    if was_editing and state is SubmissionState.EDITING:
        status_code = 422
    return JSONResponse(status_code=status_code, content=_snapshot_body(orchestrator))


@router.post("/submission/reset", responses={409: {"model": ErrorResponse}})
async def reset_submission(request: Request) -> dict:
    """評価結果と入力を破棄して新しい入力を開始する."""
    orchestrator = _orchestrator(request)
    try:
        orchestrator.reset()
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return _snapshot_body(orchestrator)


@router.get("/share")
def share(request: Request) -> dict:
    """学生に共有するURLとQRコード画像URLを返す."""
    container: Container = request.app.state.container
    link: ShareLink = build_share_link(container.config.share.public_url() or "")
    return link.model_dump(by_alias=True)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """終了時に未完了のスプレッドシート送信を待つ."""
    yield
    container: Container = app.state.container
    await container.submission_workflow().drain()


def create_app(config_path: str = "config/app.yaml") -> FastAPI:
    """FastAPIアプリケーションを生成する.

    Args:
        config_path: YAML設定ファイルのパス

    Returns:
        FastAPIインスタンス
    """
    load_dotenv()
    app = FastAPI(title="Na-Phil-Sa Reflection Feedback", lifespan=lifespan)

    container = Container()
    config = load_config(config_path)
    container.config.from_dict(config.model_dump())
    app.state.container = container
    app.include_router(router)

    logger.info(
        "Application created (provider=%s, sink=%s)",
        config.analysis.provider,
        "enabled" if config.sink.url else "disabled",
    )
    return app


app = create_app()
