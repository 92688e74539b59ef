"""Markdown export of a day's thoughts.

Each exported day becomes ``<export_dir>/YYYY-MM-DD.md`` with YAML
frontmatter, so the notes stay readable in any markdown editor:

    ---
    date: '2024-06-01'
    entries: 2
    exported: '2024-06-01T21:04:11'
    ---

    # 2024-06-01

    - [09:12:03] first thought
    - [18:40:55] second thought
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import frontmatter

from focusflow.models import Thought

logger = logging.getLogger(__name__)


def render_day(day: str, thoughts: list[Thought], exported_at: datetime) -> str:
    """Render one day as markdown with frontmatter."""
    body_lines = [f"# {day}", ""]
    for thought in thoughts:
        # Keep multi-line thoughts inside their bullet
        content = thought.content.replace("\n", "\n  ")
        body_lines.append(f"- [{thought.timestamp}] {content}")

    post = frontmatter.Post(
        "\n".join(body_lines) + "\n",
        date=day,
        entries=len(thoughts),
        exported=exported_at.isoformat(timespec="seconds"),
    )
    return frontmatter.dumps(post) + "\n"


def export_day(
    thoughts: list[Thought],
    day: str,
    out_dir: Path,
    exported_at: datetime | None = None,
) -> Path | None:
    """Write ``day`` to ``out_dir``. Returns None when the day has no thoughts."""
    if not thoughts:
        logger.debug("Nothing to export for %s", day)
        return None

    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{day}.md"
    path.write_text(render_day(day, thoughts, exported_at or datetime.now()), encoding="utf-8")
    logger.info("Exported %d thoughts for %s to %s", len(thoughts), day, path)
    return path
