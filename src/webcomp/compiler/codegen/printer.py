"""Indentation-aware buffer of generated source code."""

import textwrap
from typing import List, Set, Tuple, Union

# Generated code is written with this many spaces per level; rendering
# rescales it to the requested indent width.
SOURCE_INDENT = 4


class CodePrinter:
    """An ordered list of code chunks and nested printers.

    Nested printers are kept by reference and rendered lazily, so code added
    to them after they were spliced in still shows up in the output.
    """

    def __init__(self) -> None:
        self._items: List[Tuple[Union[str, "CodePrinter"], int]] = []

    def add(self, item: Union[str, "CodePrinter"], indent: int = 0) -> "CodePrinter":
        """Append a chunk of code, or splice in another printer.

        ``indent`` is the number of levels the item is nested below this
        printer's own level. Text chunks are dedented first, so they can be
        written as indented triple-quoted strings.
        """
        if isinstance(item, CodePrinter):
            self._items.append((item, indent))
        else:
            self._items.append((_normalize(item), indent))
        return self

    @property
    def is_empty(self) -> bool:
        return not any(self._lines(0, 1, set()))

    def format_string(self, indent: int = 0, indent_width: int = SOURCE_INDENT) -> str:
        """Render to a string, each line nested ``indent`` levels deep."""
        return "\n".join(self._lines(indent, indent_width, set()))

    render = format_string

    def _lines(self, indent: int, width: int, active: Set[int]) -> List[str]:
        if id(self) in active:
            raise ValueError("CodePrinter cannot be spliced into itself")
        active.add(id(self))
        try:
            lines: List[str] = []
            for item, extra in self._items:
                level = indent + extra
                if isinstance(item, CodePrinter):
                    lines.extend(item._lines(level, width, active))
                else:
                    lines.extend(_indent_lines(item, level, width))
            return lines
        finally:
            active.discard(id(self))

    def __str__(self) -> str:
        return self.format_string()


def _normalize(text: str) -> str:
    text = textwrap.dedent(text)
    return text.strip("\n").rstrip()


def _indent_lines(text: str, level: int, width: int) -> List[str]:
    if not text:
        return []
    result = []
    for line in text.split("\n"):
        stripped = line.lstrip(" ")
        if not stripped:
            result.append("")
            continue
        depth, rest = divmod(len(line) - len(stripped), SOURCE_INDENT)
        result.append(" " * (width * (level + depth) + rest) + stripped.rstrip())
    return result
