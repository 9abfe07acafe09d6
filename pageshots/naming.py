import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pageshots.models import CaptureTask

EDGE_UNDERSCORES = re.compile(r"^_+|_+$")


def format_timestamp(timestamp: datetime) -> str:
    """Render a sortable, filesystem safe UTC timestamp like ``2024-05-01_13-45-09``.

    Naive datetimes are treated as UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc).strftime("%Y-%m-%d_%H-%M-%S")


def url_slug(url: str) -> str:
    parsed = urlparse(url)
    hostname = (parsed.hostname or "").replace(".", "_").replace(":", "_")
    pathname = EDGE_UNDERSCORES.sub("", parsed.path.replace("/", "_"))
    return f"{hostname}{pathname}"


def base_filename(task: CaptureTask, total_tasks: int, timestamp: datetime) -> str:
    """Build the screenshot name without extension.

    When the run holds more than one task the name is prefixed with the
    1-based size and url positions, zero padded to two digits, so that
    files sort in capture order and never collide.
    """
    name = f"{format_timestamp(timestamp)}_{task.size.label}_{url_slug(task.url)}"
    if total_tasks > 1:
        return f"{task.size_index + 1:02d}_{task.url_index + 1:02d}_{name}"
    return name


def screenshot_path(
    output_dir: Path,
    task: CaptureTask,
    total_tasks: int,
    timestamp: Optional[datetime] = None,
) -> Path:
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    return Path(output_dir) / f"{base_filename(task, total_tasks, timestamp)}.png"
