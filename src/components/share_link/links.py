"""学生招待用の共有リンクとQRコードURLの生成."""

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

QR_CODE_ENDPOINT = "https://quickchart.io/qr"


class ShareLink(BaseModel):
    """共有URLとそのQRコード画像URL."""

    model_config = ConfigDict(populate_by_name=True)

    share_url: str = Field(alias="shareUrl")
    qr_code_url: str = Field(alias="qrCodeUrl")


def normalize_share_url(url: str) -> str:
    """前後の空白を除去し、スキームが無ければhttps://を付与する."""
    url = url.strip()
    if not url:
        return ""
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


def build_qr_code_url(url: str, size: int = 180, margin: int = 1) -> str:
    """共有URLを表すQRコード画像のURLを返す.

    Args:
        url: 共有するURL
        size: 画像サイズ（ピクセル）
        margin: 余白

    Returns:
        QRコード画像URL. 共有URLが空の場合は空文字列.
    """
    normalized = normalize_share_url(url)
    if not normalized:
        return ""
    return f"{QR_CODE_ENDPOINT}?text={quote(normalized, safe='')}&size={size}&margin={margin}"


def build_share_link(url: str) -> ShareLink:
    """共有URLからShareLinkを生成する."""
    return ShareLink(share_url=normalize_share_url(url), qr_code_url=build_qr_code_url(url))
