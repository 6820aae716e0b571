"""Indentation-aware text builder used by the code generator."""

from dataclasses import dataclass

from .errors import IndentationUnderflow


@dataclass(frozen=True)
class CodeFileOptions:
    """Formatting options shared by every generated file."""
    indent: str = "    "
    line_break: str = "\n"


class CodeFile:
    """Accumulates lines of code at a tracked indentation depth.

    Example:
        file = CodeFile(CodeFileOptions())
        file.begin_indent("export interface Scalars {")
        file.line("ID: Scalar<unknown, unknown>")
        file.end_indent("}")
        text = file.build_string()
    """

    def __init__(self, options: CodeFileOptions):
        self.options = options
        self.indent_level = 0
        self._parts: list[str] = []

    def line(self, code: str):
        """Append a line at the current indentation."""
        self._parts.append(self.options.indent * self.indent_level)
        self._parts.append(code)
        self._parts.append(self.options.line_break)

    def blank_line(self):
        """Append an empty line (no indentation)."""
        self._parts.append(self.options.line_break)

    def begin_indent(self, code: str):
        """Append `code`, then indent everything that follows."""
        self.line(code)
        self.indent_level += 1

    def end_indent(self, code: str):
        """Dedent, then append the closing `code`."""
        if self.indent_level == 0:
            raise IndentationUnderflow(
                f"Cannot close block with {code!r}, indent level is already 0"
            )
        self.indent_level -= 1
        self.line(code)

    def build_string(self) -> str:
        """Return the accumulated text."""
        return "".join(self._parts)
