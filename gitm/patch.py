"""
Unified Diff Model

Structured representation of the patch attached to a commit:
PatchSet -> FileDiff -> Hunk -> PatchLine. Built once per commit by
parse_patch() and never mutated afterward.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from gitm.configs import DIFF_MARKER, get_logger
from gitm.exceptions import PatchParseError

logger = get_logger("patch")

HUNK_HEADER_RE = re.compile(
    r"^@@ -(?P<source_start>\d+)(?:,(?P<source_length>\d+))? "
    r"\+(?P<target_start>\d+)(?:,(?P<target_length>\d+))? @@ ?(?P<section>.*)$"
)


class LineType(str, Enum):
    """Tag for a single line inside a hunk."""

    ADDED = "+"
    REMOVED = "-"
    CONTEXT = " "


@dataclass
class PatchLine:
    """One tagged line of a hunk, without its leading marker."""

    line_type: LineType
    value: str

    def __str__(self) -> str:
        return f"{self.line_type.value}{self.value}"


@dataclass
class Hunk:
    """A contiguous block of changes within one file."""

    source_start: int
    source_length: int
    target_start: int
    target_length: int
    section: str = ""
    lines: list[PatchLine] = field(default_factory=list)

    @property
    def header(self) -> str:
        header = (
            f"@@ -{self.source_start},{self.source_length} "
            f"+{self.target_start},{self.target_length} @@"
        )
        return f"{header} {self.section}" if self.section else header

    def __str__(self) -> str:
        return "\n".join([self.header] + [str(line) for line in self.lines])


@dataclass
class FileDiff:
    """All hunks touching one file, plus the extended git header lines."""

    source_file: Optional[str] = None
    target_file: Optional[str] = None
    header: list[str] = field(default_factory=list)
    hunks: list[Hunk] = field(default_factory=list)

    @property
    def path(self) -> Optional[str]:
        """Path of the file after the change (before it, for deletions)."""
        if self.target_file and self.target_file != "/dev/null":
            return self.target_file
        return self.source_file

    def __str__(self) -> str:
        return "\n".join(self.header + [str(hunk) for hunk in self.hunks])


@dataclass
class PatchSet:
    """Ordered collection of file diffs for one commit."""

    files: list[FileDiff] = field(default_factory=list)

    def lines(self) -> list[PatchLine]:
        return [line for f in self.files for hunk in f.hunks for line in hunk.lines]

    def added_lines(self) -> list[str]:
        return [line.value for line in self.lines() if line.line_type is LineType.ADDED]

    def removed_lines(self) -> list[str]:
        return [line.value for line in self.lines() if line.line_type is LineType.REMOVED]

    def __len__(self) -> int:
        return len(self.files)

    def __str__(self) -> str:
        return "\n".join(str(f) for f in self.files)


def _strip_prefix(path: str) -> str:
    """Drop the a/ or b/ prefix git puts on diff paths."""
    path = path.split("\t", 1)[0].strip()
    if path.startswith(("a/", "b/")):
        return path[2:]
    return path


def parse_patch(text: str) -> PatchSet:
    """
    Parse unified diff text (as emitted by `git log --patch`) into a PatchSet.

    Hunk bodies are consumed using the line counts in the hunk header, so a
    removed line reading "-- x" (printed as "--- x") is never mistaken for a
    file header.

    Args:
        text: Diff text, possibly covering several files

    Returns:
        PatchSet (empty if the text holds no diff)

    Raises:
        PatchParseError: If a hunk header cannot be decoded
    """
    patch = PatchSet()
    current_file: Optional[FileDiff] = None
    current_hunk: Optional[Hunk] = None
    source_remaining = 0
    target_remaining = 0

    for line in text.split("\n"):
        if current_hunk is not None and (source_remaining > 0 or target_remaining > 0):
            if line.startswith("\\"):
                # "\ No newline at end of file"
                continue
            marker, value = (line[0], line[1:]) if line else (" ", "")
            if marker == "+":
                current_hunk.lines.append(PatchLine(LineType.ADDED, value))
                target_remaining -= 1
                continue
            if marker == "-":
                current_hunk.lines.append(PatchLine(LineType.REMOVED, value))
                source_remaining -= 1
                continue
            if marker == " ":
                current_hunk.lines.append(PatchLine(LineType.CONTEXT, value))
                source_remaining -= 1
                target_remaining -= 1
                continue
            # Truncated hunk: fall through and treat the line as a header
            logger.debug(f"Hunk ended early at line: {line[:80]!r}")
            source_remaining = target_remaining = 0

        if line.startswith(DIFF_MARKER):
            current_file = FileDiff(header=[line])
            current_hunk = None
            parts = line[len(DIFF_MARKER):].split(" b/", 1)
            if len(parts) == 2:
                current_file.source_file = _strip_prefix(parts[0])
                current_file.target_file = parts[1].strip()
            patch.files.append(current_file)
            continue

        if current_file is None:
            # Text before the first file header carries no diff content
            continue

        match = HUNK_HEADER_RE.match(line)
        if match:
            current_hunk = Hunk(
                source_start=int(match.group("source_start")),
                source_length=int(match.group("source_length") or 1),
                target_start=int(match.group("target_start")),
                target_length=int(match.group("target_length") or 1),
                section=match.group("section").strip(),
            )
            current_file.hunks.append(current_hunk)
            source_remaining = current_hunk.source_length
            target_remaining = current_hunk.target_length
            continue
        if line.startswith("@@ "):
            raise PatchParseError(
                "Malformed hunk header", {"file": current_file.path, "line": line[:120]}
            )

        if current_hunk is None:
            if line.startswith("--- "):
                current_file.source_file = _strip_prefix(line[4:])
            elif line.startswith("+++ "):
                current_file.target_file = _strip_prefix(line[4:])
            if line:
                current_file.header.append(line)

    return patch
