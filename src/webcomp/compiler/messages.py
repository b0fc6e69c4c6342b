"""Diagnostics reported while compiling units."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

log = logging.getLogger(__name__)


@dataclass
class Message:
    level: int
    text: str
    filename: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.level >= logging.ERROR

    def __str__(self) -> str:
        kind = logging.getLevelName(self.level).lower()
        if self.filename:
            return f"{self.filename}: {kind}: {self.text}"
        return f"{kind}: {self.text}"


@dataclass
class Messages:
    """Collects diagnostics and forwards each one to the logger."""

    messages: List[Message] = field(default_factory=list)

    def error(self, text: str, filename: Optional[str] = None) -> None:
        self._report(logging.ERROR, text, filename)

    def warning(self, text: str, filename: Optional[str] = None) -> None:
        self._report(logging.WARNING, text, filename)

    def info(self, text: str, filename: Optional[str] = None) -> None:
        self._report(logging.INFO, text, filename)

    @property
    def errors(self) -> List[Message]:
        return [m for m in self.messages if m.is_error]

    @property
    def has_errors(self) -> bool:
        return any(m.is_error for m in self.messages)

    def clear(self) -> None:
        self.messages.clear()

    def _report(self, level: int, text: str, filename: Optional[str]) -> None:
        message = Message(level=level, text=text, filename=filename)
        self.messages.append(message)
        log.log(level, str(message))
