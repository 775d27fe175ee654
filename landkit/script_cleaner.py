"""Remove ``console`` logging calls and ``debugger`` statements from scripts.

The cleaner walks the source as a stream of JavaScript tokens so that text
inside string, template and regular-expression literals (and comments) is
never mistaken for code. A call that stands as a statement is removed with
its trailing semicolon; a call used inside an expression or as the body of a
control statement is replaced with ``void 0`` so the surrounding syntax stays
valid.

Examples
--------
>>> strip_console_calls('run(); console.log("x", f(1)); done();')
'run();  done();'
>>> strip_console_calls('console.log("a)b"); run();')
' run();'
>>> strip_console_calls("if (ok) console.log(1); else stop();")
'if (ok) void 0; else stop();'
"""

from __future__ import annotations

import re

CONSOLE_CALL_START = re.compile(r"console\s*\.\s*(?:log|info|debug)\s*\(")
DEBUGGER_KEYWORD = re.compile(r"debugger\b")
IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
TRAILING_SEMICOLON = re.compile(r"[ \t]*;?")

QUOTES = frozenset("\"'")
OPENERS = {"(": ")", "[": "]", "{": "}"}
STATEMENT_BOUNDARIES = frozenset({"", ";", "{", "}"})
REGEX_PREFIX_CHARS = frozenset("(,=:[!&|?{};+-*%<>~^")
REGEX_PREFIX_WORDS = frozenset(
    {
        "await",
        "case",
        "delete",
        "do",
        "else",
        "in",
        "instanceof",
        "new",
        "of",
        "return",
        "throw",
        "typeof",
        "void",
        "yield",
    }
)


class _Scanner:
    """Cursor over JavaScript source that knows how to skip literals."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.last = ""

    def skip_literal(self, index: int) -> int | None:
        """Return the end of a literal or comment at ``index``, if one starts."""
        source = self.source
        char = source[index]
        if char in QUOTES:
            return self._skip_quoted(index, char)
        if char == "`":
            return self._skip_template(index)
        if source.startswith("//", index):
            end = source.find("\n", index)
            return len(source) if end == -1 else end
        if source.startswith("/*", index):
            end = source.find("*/", index + 2)
            return len(source) if end == -1 else end + 2
        if char == "/" and self._regex_allowed():
            return self._skip_regex(index)
        return None

    def note(self, token: str) -> None:
        """Remember the last significant token for regex detection."""
        token = token.strip()
        if token and not token.startswith(("//", "/*")):
            self.last = token

    def skip_balanced(self, index: int, closer: str) -> int:
        """Return the index just past ``closer`` at nesting depth zero."""
        source = self.source
        stack = [closer]
        while index < len(source):
            end = self.skip_literal(index)
            if end is not None:
                self.note(source[index:end])
                index = end
                continue
            char = source[index]
            if char in OPENERS:
                stack.append(OPENERS[char])
            elif char == stack[-1]:
                stack.pop()
                if not stack:
                    self.note(char)
                    return index + 1
            word = IDENTIFIER.match(source, index)
            if word is not None and not char.isdigit():
                self.note(word.group())
                index = word.end()
                continue
            self.note(char)
            index += 1
        return index

    def _regex_allowed(self) -> bool:
        last = self.last
        if not last:
            return True
        if IDENTIFIER.fullmatch(last):
            return last in REGEX_PREFIX_WORDS
        return last[-1] in REGEX_PREFIX_CHARS

    def _skip_quoted(self, index: int, quote: str) -> int:
        source = self.source
        index += 1
        while index < len(source):
            char = source[index]
            if char == "\\":
                index += 2
                continue
            if char == quote or char == "\n":
                return index + 1
            index += 1
        return index

    def _skip_template(self, index: int) -> int:
        source = self.source
        index += 1
        while index < len(source):
            char = source[index]
            if char == "\\":
                index += 2
                continue
            if char == "`":
                return index + 1
            if source.startswith("${", index):
                index = self.skip_balanced(index + 2, "}")
                continue
            index += 1
        return index

    def _skip_regex(self, index: int) -> int:
        source = self.source
        cursor = index + 1
        in_class = False
        while cursor < len(source):
            char = source[cursor]
            if char == "\\":
                cursor += 2
                continue
            if char == "\n":
                return index + 1
            if char == "[":
                in_class = True
            elif char == "]":
                in_class = False
            elif char == "/" and not in_class:
                cursor += 1
                flags = IDENTIFIER.match(source, cursor)
                return flags.end() if flags is not None else cursor
            cursor += 1
        return index + 1


def strip_console_calls(source: str) -> str:
    """Remove ``console.log``/``info``/``debug`` calls and ``debugger``."""
    scanner = _Scanner(source)
    parts: list[str] = []
    index = 0
    while index < len(source):
        end = scanner.skip_literal(index)
        if end is not None:
            parts.append(source[index:end])
            scanner.note(source[index:end])
            index = end
            continue
        char = source[index]
        word = IDENTIFIER.match(source, index)
        if word is None or char.isdigit():
            parts.append(char)
            scanner.note(char)
            index += 1
            continue
        after_dot = scanner.last.endswith(".")
        call = None if after_dot else CONSOLE_CALL_START.match(source, index)
        keyword = None if after_dot else DEBUGGER_KEYWORD.match(source, index)
        if call is None and keyword is None:
            parts.append(word.group())
            scanner.note(word.group())
            index = word.end()
            continue
        statement = scanner.last in STATEMENT_BOUNDARIES
        if call is not None:
            previous = scanner.last
            end = scanner.skip_balanced(call.end(), ")")
            scanner.last = previous
        else:
            end = word.end()
        if statement:
            end = TRAILING_SEMICOLON.match(source, end).end()
        else:
            parts.append("void 0")
            scanner.note("0")
        index = end
    return "".join(parts)


__all__ = ["strip_console_calls"]
