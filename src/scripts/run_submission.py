"""振り返りを1件提出して評価結果を表示するスクリプト.

Usage:
    python src/scripts/run_submission.py --student-info "1-1 홍길동" --content "오늘 배운 내용은..."

    # 감명깊은 문구 포함
    python src/scripts/run_submission.py --student-info "1-1 홍길동" \
        --phrase "..." --content-file reflection.txt
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.common.config.settings import load_config
from src.common.defs.reflection import SubmissionState
from src.common.di.container import Container
from src.common.lib.logging import getLogger

logger = getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """コマンドライン引数をパースする."""
    parser = argparse.ArgumentParser(description="振り返りの提出と評価")
    parser.add_argument("--student-info", required=True, help="학년-반 이름 (例: 1-1 홍길동)")
    parser.add_argument("--phrase", default="", help="가장 감명깊은 문구")
    content = parser.add_mutually_exclusive_group(required=True)
    content.add_argument("--content", help="필사한 내용과 느낀점")
    content.add_argument("--content-file", type=Path, help="内容を読み込むテキストファイル")
    parser.add_argument("--config", default="config/app.yaml", help="設定ファイルのパス")
    return parser.parse_args()


def setup(config_path: str) -> Container:
    """DIコンテナを初期化して返す."""
    load_dotenv()
    config = load_config(config_path)
    container = Container()
    container.config.from_dict(config.model_dump())
    return container


async def run(args: argparse.Namespace) -> SubmissionState:
    """提出を実行し、結果をログに出力する."""
    container = setup(args.config)
    orchestrator = container.submission_orchestrator()

    content = args.content if args.content is not None else args.content_file.read_text(encoding="utf-8")
    orchestrator.edit(student_info=args.student_info, impressive_phrase=args.phrase, content=content)

    logger.info("Form title: %s", orchestrator.form_title)
    state = await orchestrator.submit()
    await container.submission_workflow().drain()

    if state is SubmissionState.EDITING:
        logger.error("Validation failed: %s", orchestrator.message)
        return state
    if state is SubmissionState.FAILED:
        logger.error("Analysis failed: %s", orchestrator.message)
        return state

    evaluation = orchestrator.evaluation
    oreo = evaluation.oreo_analysis
    logger.info("=" * 60)
    logger.info("Evaluation Result")
    logger.info("=" * 60)
    logger.info("Summary: %s", evaluation.summary)
    logger.info(
        "OREO: opinion=%s reason=%s example=%s opinionRestated=%s",
        oreo.opinion,
        oreo.reason,
        oreo.example,
        oreo.opinion_restated,
    )
    logger.info("Score: %s", evaluation.score)
    logger.info("Constructive Feedback:\n%s", evaluation.constructive_feedback)
    logger.info("Encouragement: %s", evaluation.encouragement)
    logger.info("=" * 60)
    return state


def main() -> None:
    """振り返りの提出と評価を行う."""
    args = parse_args()
    try:
        state = asyncio.run(run(args))
    except Exception:
        logger.exception("Failed to run submission")
        sys.exit(1)
    if state is not SubmissionState.REVIEWING:
        sys.exit(1)


if __name__ == "__main__":
    main()
