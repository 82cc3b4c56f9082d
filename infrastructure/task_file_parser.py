import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from application.ports import InvalidTaskIdError
from core import Task


class TaskFileParser:
    """Reads and writes the ``.task`` format: YAML front matter + description body."""

    FRONT_MATTER = re.compile(r"\A---\n(.*?)\n---\n?(.*)\Z", re.DOTALL)
    CURRENT_SCHEMA_VERSION = 1

    @staticmethod
    def _coerce_timestamp(value: Any) -> Optional[datetime]:
        """Normalize YAML timestamps (already parsed or still text) to ``datetime``."""
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            return datetime.combine(value, datetime.min.time())
        else:
            parsed = datetime.fromisoformat(str(value).strip())
        if parsed.tzinfo is not None:
            # Tasks carry naive local times; fold explicit offsets into local time.
            parsed = parsed.astimezone().replace(tzinfo=None)
        return parsed

    @staticmethod
    def validate_id(task_id: str) -> str:
        """Return ``task_id`` or raise :class:`InvalidTaskIdError`; ids become file names."""
        if not task_id or ".." in task_id or "/" in task_id or "\\" in task_id:
            raise InvalidTaskIdError(task_id)
        return task_id

    @staticmethod
    def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat(timespec="seconds") if value is not None else None

    @classmethod
    def to_file_content(cls, task: Task) -> str:
        metadata: Dict[str, Any] = {
            "schema_version": cls.CURRENT_SCHEMA_VERSION,
            "id": task.id,
            "title": task.title,
            "completed": task.completed,
            "created": cls._format_timestamp(task.created),
            "due": cls._format_timestamp(task.due),
            "defer_until": cls._format_timestamp(task.defer_until),
        }
        header = yaml.safe_dump(metadata, allow_unicode=True, sort_keys=False).rstrip("\n")
        return f"---\n{header}\n---\n{task.description}"

    @classmethod
    def parse_text(cls, content: str) -> Optional[Task]:
        """Build a Task from file content; ``None`` when there is no usable header.

        Raises ``ValueError`` for malformed timestamps or an unusable id and
        ``yaml.YAMLError`` for broken front matter.
        """
        match = cls.FRONT_MATTER.match(content)
        if not match:
            return None
        metadata = yaml.safe_load(match.group(1)) or {}
        if not isinstance(metadata, dict):
            return None
        task_id = str(metadata.get("id", "") or "").strip()
        if not task_id:
            return None
        cls.validate_id(task_id)
        created = cls._coerce_timestamp(metadata.get("created")) or datetime.now()
        return Task(
            id=task_id,
            title=str(metadata.get("title", "") or ""),
            description=match.group(2),
            completed=bool(metadata.get("completed", False)),
            created=created,
            due=cls._coerce_timestamp(metadata.get("due")),
            defer_until=cls._coerce_timestamp(metadata.get("defer_until")),
        )

    @classmethod
    def parse(cls, filepath: Path) -> Optional[Task]:
        if not filepath.exists():
            return None
        return cls.parse_text(filepath.read_text(encoding="utf-8"))
