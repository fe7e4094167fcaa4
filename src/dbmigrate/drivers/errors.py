"""Backend-neutral decoding of script execution errors.

Each driver maps its native exception into a :class:`PositionedError`;
:func:`describe_error` turns that into a message pointing at the failing
line of the script.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..files.text import line_column_from_offset, lines_before_and_after


@dataclass(frozen=True)
class PositionedError:
    """Error reported by a backend while executing a script.

    Attributes:
        severity: Severity or class, e.g. ``ERROR``.
        code: Backend-specific error code, e.g. a SQLSTATE.
        message: Primary error message.
        position: 1-based character offset into the script, if known.
    """

    severity: str
    code: str
    message: str
    position: int | None = None

    @property
    def summary(self) -> str:
        return f"{self.severity} {self.code}: {self.message}"


def describe_error(
    error: PositionedError,
    script: str,
    before: int = 5,
    after: int = 5,
) -> str:
    """Render an execution error with the location of the fault.

    Args:
        error: Error mapped from the backend.
        script: Script text the error refers to.
        before: Lines of context shown before the failing line.
        after: Lines of context shown after the failing line.

    Returns:
        ``"<severity> <code>: <message>"``, followed by the line, column and
        surrounding script when the position is valid for ``script``.
    """
    if error.position is None:
        return error.summary

    offset = error.position - 1
    if offset < 0 or offset > len(script):
        return error.summary

    line, column = line_column_from_offset(script, offset)
    context = lines_before_and_after(script, line, before, after, line_numbers=True)
    return f"{error.summary} in line {line}, column {column}:\n\n{context}"
