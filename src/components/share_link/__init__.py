"""Share link component for the student invitation QR code."""

from src.components.share_link.links import (
    ShareLink,
    build_qr_code_url,
    build_share_link,
    normalize_share_url,
)

__all__ = [
    "ShareLink",
    "build_qr_code_url",
    "build_share_link",
    "normalize_share_url",
]
