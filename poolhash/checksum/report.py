"""Per-directory results and the batch report."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class Outcome(str, Enum):
    """Result of processing one directory."""

    CREATED = "created"
    VALID = "valid"
    TAMPERED = "tampered"
    NO_SIDECAR = "no_sidecar"
    NO_FILES = "no_files"
    ERROR = "error"


_OK_OUTCOMES = {Outcome.CREATED, Outcome.VALID, Outcome.NO_FILES}


class DirectoryResult(BaseModel):
    """Outcome of a create or validate call for a single directory."""

    directory: str = ""
    outcome: Outcome = Outcome.NO_FILES
    digest: str = ""
    stored_digest: str = ""
    sidecar_path: str = ""
    file_count: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome in _OK_OUTCOMES


class BatchReport(BaseModel):
    """Results for every directory visited by one invocation."""

    operation: str = ""
    base_directory: str = ""
    recursive: bool = False
    cancelled: bool = False
    started_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
    )
    results: list[DirectoryResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    def counts(self) -> dict[str, int]:
        """Return the number of results per outcome value."""
        tally = {o.value: 0 for o in Outcome}
        for r in self.results:
            tally[r.outcome.value] += 1
        return tally

    def to_markdown(self) -> str:
        """Generate a Markdown summary of the batch."""
        lines = [
            f"# Pool Checksum Report ({self.operation})",
            "",
            f"**Base directory:** `{self.base_directory}`",
            f"**Recursive:** {'Yes' if self.recursive else 'No'}",
            f"**Started:** {self.started_at}",
            f"**Status:** {'OK' if self.ok else 'FAILED'}",
            "",
        ]
        if self.cancelled:
            lines.append("_Cancelled before all directories were processed._")
            lines.append("")

        if not self.results:
            lines.append("No directories processed.")
            return "\n".join(lines)

        lines.append("| Directory | Outcome | Files | Digest |")
        lines.append("|-----------|---------|-------|--------|")
        for r in self.results:
            digest = f"`{r.digest}`" if r.digest else ""
            lines.append(f"| `{r.directory}` | {r.outcome.value} | {r.file_count} | {digest} |")
        lines.append("")

        summary = ", ".join(f"{k}: {v}" for k, v in self.counts().items() if v)
        lines.append(f"**Summary:** {summary}")
        return "\n".join(lines)

    def to_json(self) -> str:
        """Return the structured JSON report."""
        data = self.model_dump(mode="json")
        data["ok"] = self.ok
        data["counts"] = self.counts()
        return json.dumps(data, indent=2)
