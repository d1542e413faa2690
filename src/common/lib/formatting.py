"""フォームタイトルとタイムスタンプの表示用フォーマット."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

KST = ZoneInfo("Asia/Seoul")


def format_date_display(date_str: str) -> str:
    """ISO形式の日付を「M월 D일」形式に変換する.

    Args:
        date_str: YYYY-MM-DD形式の日付. 空文字列の場合は空文字列を返す.

    Returns:
        表示用の日付文字列
    """
    if not date_str:
        return ""
    parsed = date.fromisoformat(date_str)
    return f"{parsed.month}월 {parsed.day}일"


def build_form_title(date_str: str, title_suffix: str) -> str:
    """日付と活動名からフォームタイトルを組み立てる."""
    return f"{format_date_display(date_str)} {title_suffix}"


def format_korean_timestamp(moment: datetime | None = None) -> str:
    """韓国ロケールの日時表記（例: 2025. 9. 9. 오후 3:04:05）を返す.

    Args:
        moment: 対象の日時. 省略時はソウル時間の現在時刻.
            タイムゾーン付きの日時はソウル時間に変換し、naiveな日時はそのまま扱う.

    Returns:
        タイムスタンプ文字列
    """
    moment = moment or datetime.now(tz=KST)
    if moment.tzinfo is not None:
        moment = moment.astimezone(KST)
    meridiem = "오전" if moment.hour < 12 else "오후"  # noqa: PLR2004
    hour = moment.hour % 12 or 12
    return (
        f"{moment.year}. {moment.month}. {moment.day}. "
        f"{meridiem} {hour}:{moment.minute:02d}:{moment.second:02d}"
    )


def today_iso() -> str:
    """ソウル時間の今日の日付をISO形式で返す."""
    return datetime.now(tz=KST).date().isoformat()
