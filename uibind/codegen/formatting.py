"""Whitespace normalisation for rendered C# sources."""

from __future__ import annotations

from typing import List


class SourceFormatter:
    """Produces stable layout so regenerated files diff cleanly."""

    def format(self, source: str) -> str:
        normalized = source.replace("\r\n", "\n").replace("\r", "\n").expandtabs(4)
        cleaned: List[str] = []
        previous_blank = False

        for line in normalized.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                # No leading blank lines, no runs of blanks, none right after an opening brace.
                if not cleaned or previous_blank or cleaned[-1].strip() == "{":
                    continue
                previous_blank = True
                cleaned.append("")
                continue
            if stripped.strip() == "}" and previous_blank:
                cleaned.pop()
            cleaned.append(stripped)
            previous_blank = False

        while cleaned and cleaned[-1] == "":
            cleaned.pop()

        return "\n".join(cleaned) + "\n"


__all__ = ["SourceFormatter"]
