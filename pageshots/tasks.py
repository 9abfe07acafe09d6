from typing import Sequence

from pageshots.errors import NoUrlsError
from pageshots.models import CaptureTask, ViewportSize


def normalize_url(raw: str) -> str:
    """Prefix bare hostnames with https://, leave http(s) urls untouched."""
    if raw.startswith("http://") or raw.startswith("https://"):
        return raw
    return f"https://{raw}"


def expand_tasks(urls: Sequence[str], sizes: Sequence[ViewportSize]) -> list[CaptureTask]:
    """Build one task per (url, size) pair.

    Tasks are ordered size-major: every url for the first size, then every
    url for the second size, and so on.

    Raises:
        NoUrlsError: If ``urls`` is empty.
    """
    if not urls:
        raise NoUrlsError()

    normalized = [normalize_url(url) for url in urls]
    return [
        CaptureTask(url=url, url_index=url_index, size=size, size_index=size_index)
        for size_index, size in enumerate(sizes)
        for url_index, url in enumerate(normalized)
    ]
