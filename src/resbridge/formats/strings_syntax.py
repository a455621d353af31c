"""Scanner for Apple ``.strings`` and array-list files.

Both files share one grammar::

    entry  := token "=" value ";"
    value  := token | "(" [token ("," token)* [","]] ")"
    token  := '"' chars '"' | bare-chars

Comments (``/* ... */``, ``// ...`` and ``# ...`` lines) and whitespace may
appear between tokens. Inside quoted tokens ``\\"`` yields a literal quote
and ``\\\\`` a single backslash; every other backslash sequence is kept verbatim.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from resbridge.diagnostics import Diagnostic, DiagnosticCode, ResourceFormatError

__all__ = ["StringsEntry", "parse_strings_entries"]

_BARE_TERMINATORS = frozenset(' \t\r\n=;(),"')


@dataclass(frozen=True, slots=True)
class StringsEntry:
    """One ``key = value;`` entry.

    Attributes:
        key: Entry key
        value: Text for plain entries, tuple of texts for list entries
        line: 1-indexed line where the key starts
    """

    key: str
    value: str | tuple[str, ...]
    line: int


class _Scanner:
    """Position-tracking reader over the source text."""

    __slots__ = ("_line_mark", "path", "pos", "source")

    def __init__(self, source: str, path: str) -> None:
        self.source = source
        self.path = path
        self.pos = 0
        self._line_mark = (0, 1)

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def line(self) -> int:
        mark_pos, mark_line = self._line_mark
        if self.pos < mark_pos:
            mark_pos, mark_line = 0, 1
        current = mark_line + self.source.count("\n", mark_pos, self.pos)
        self._line_mark = (self.pos, current)
        return current

    def peek(self) -> str | None:
        return None if self.is_eof else self.source[self.pos]

    def fail(self, detail: str) -> ResourceFormatError:
        diagnostic = Diagnostic(
            code=DiagnosticCode.MALFORMED_STRINGS,
            message=detail,
            location=f"{self.path}:{self.line}",
        )
        return ResourceFormatError(diagnostic, path=self.path)

    def skip_trivia(self) -> None:
        """Skip whitespace and comments."""
        source = self.source
        while not self.is_eof:
            ch = source[self.pos]
            if ch in " \t\r\n":
                self.pos += 1
            elif source.startswith("/*", self.pos):
                end = source.find("*/", self.pos + 2)
                if end < 0:
                    raise self.fail("Unterminated block comment")
                self.pos = end + 2
            elif source.startswith("//", self.pos) or ch == "#":
                end = source.find("\n", self.pos)
                self.pos = len(source) if end < 0 else end + 1
            else:
                return

    def expect(self, char: str) -> None:
        self.skip_trivia()
        if self.peek() != char:
            found = "end of file" if self.is_eof else repr(self.peek())
            raise self.fail(f"Expected '{char}' but found {found}")
        self.pos += 1

    def accept(self, char: str) -> bool:
        self.skip_trivia()
        if self.peek() == char:
            self.pos += 1
            return True
        return False

    def token(self) -> str:
        """Read a quoted or bare token."""
        self.skip_trivia()
        if self.is_eof:
            raise self.fail("Expected a token but found end of file")
        if self.source[self.pos] == '"':
            return self._quoted()
        start = self.pos
        while not self.is_eof and self.source[self.pos] not in _BARE_TERMINATORS:
            self.pos += 1
        if self.pos == start:
            raise self.fail(f"Unexpected character {self.source[self.pos]!r}")
        return self.source[start : self.pos]

    def _quoted(self) -> str:
        start_line = self.line
        self.pos += 1
        chars: list[str] = []
        source = self.source
        while not self.is_eof:
            ch = source[self.pos]
            if ch == "\\" and self.pos + 1 < len(source):
                nxt = source[self.pos + 1]
                chars.append(nxt if nxt in '"\\' else ch + nxt)
                self.pos += 2
            elif ch == '"':
                self.pos += 1
                return "".join(chars)
            else:
                chars.append(ch)
                self.pos += 1
        raise self.fail(f"Unterminated string starting at line {start_line}")


def parse_strings_entries(source: str, path: str = "<string>") -> list[StringsEntry]:
    """Parse the entries of a strings or array-list file.

    Args:
        source: File content, BOM already removed
        path: File path for diagnostics

    Returns:
        Entries in file order

    Raises:
        ResourceFormatError: If the content does not follow the grammar

    Example:
        >>> [e.value for e in parse_strings_entries('"a" = "x";\\n"b" = ("1", "2",);')]
        ['x', ('1', '2')]
    """
    scanner = _Scanner(source, path)
    entries: list[StringsEntry] = []
    while True:
        scanner.skip_trivia()
        if scanner.is_eof:
            return entries
        line = scanner.line
        key = scanner.token()
        scanner.expect("=")
        value: str | tuple[str, ...]
        if scanner.accept("("):
            items: list[str] = []
            while not scanner.accept(")"):
                items.append(scanner.token())
                if not scanner.accept(","):
                    scanner.expect(")")
                    break
            value = tuple(items)
        else:
            value = scanner.token()
        scanner.expect(";")
        entries.append(StringsEntry(key=key, value=value, line=line))
