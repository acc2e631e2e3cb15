from __future__ import annotations


def should_include(line: int, hunk_start: int, hunk_count: int) -> bool:
    # Both ends are exclusive: the first and last line of the range never match.
    return hunk_start < line < hunk_start + hunk_count
