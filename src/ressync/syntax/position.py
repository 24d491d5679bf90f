"""Position utilities for resource source text.

Helper functions for converting character offsets to line/column positions
and rendering error context.
"""


def line_offset(source: str, pos: int) -> int:
    """Get 0-based line number from character offset.

    Example:
        >>> source = "line1\\nline2\\nline3"
        >>> line_offset(source, 0)
        0
        >>> line_offset(source, 6)
        1
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))
    return source.count("\n", 0, pos)


def column_offset(source: str, pos: int) -> int:
    """Get 0-based column number from character offset.

    Example:
        >>> source = "hello\\nworld"
        >>> column_offset(source, 2)
        2
        >>> column_offset(source, 6)
        0
    """
    if pos < 0:
        msg = f"Position must be >= 0, got {pos}"
        raise ValueError(msg)
    pos = min(pos, len(source))
    line_start = source.rfind("\n", 0, pos)
    if line_start == -1:
        return pos
    return pos - line_start - 1


def get_error_context(source: str, pos: int, context_lines: int = 1, marker: str = "^") -> str:
    """Get formatted error context showing position in source.

    Args:
        source: Complete source text
        pos: Character offset of error
        context_lines: Number of lines to show before/after error
        marker: Character to use for error marker

    Returns:
        Formatted error context string (no trailing newline)

    Example:
        >>> source = "line1\\nline2\\nerror here\\nline4\\nline5"
        >>> print(get_error_context(source, 12, context_lines=1))
        line2
        error here
        ^
        line4
    """
    line_num = line_offset(source, pos)
    col_num = column_offset(source, pos)

    lines = source.split("\n")
    start_line = max(0, line_num - context_lines)
    end_line = min(len(lines), line_num + context_lines + 1)

    context = []
    for i in range(start_line, end_line):
        context.append(lines[i].rstrip("\r"))
        if i == line_num:
            context.append(" " * col_num + marker)

    return "\n".join(context)
