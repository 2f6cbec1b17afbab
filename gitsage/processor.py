"""Filtering, sizing and chunking of staged diffs before they are sent for generation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Iterable

DEFAULT_DIFF_SIZE_THRESHOLD = 10 * 1024
DEFAULT_MAX_CHUNK_SIZE = 100 * 1024
DEFAULT_MAX_CONCURRENT = 3


class ChangeType(enum.Enum):
    """How a file changed in the diff."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"

    def __str__(self) -> str:
        return self.value


_CHANGE_SYMBOLS = {
    ChangeType.ADDED: "A",
    ChangeType.DELETED: "D",
    ChangeType.RENAMED: "R",
}


@dataclass
class DiffChunk:
    """The diff of a single file."""

    file_path: str
    content: str = ""
    additions: int = 0
    deletions: int = 0
    change_type: ChangeType = ChangeType.MODIFIED
    is_lock_file: bool = False
    is_binary: bool = False
    old_path: str = ""

    @property
    def size(self) -> int:
        """Size of the content in bytes."""
        return len(self.content.encode("utf-8"))


@dataclass
class ChunkGroup:
    """Chunks meant to be processed together by one worker."""

    chunks: list[DiffChunk] = field(default_factory=list)
    total_size: int = 0


@dataclass
class ProcessedDiff:
    """Result of processing a diff."""

    chunks: list[DiffChunk]
    total_size: int
    requires_chunking: bool
    summary: str = ""
    chunk_groups: list[ChunkGroup] = field(default_factory=list)


@dataclass
class ProcessorConfig:
    """Thresholds that control chunking."""

    diff_size_threshold: int = DEFAULT_DIFF_SIZE_THRESHOLD
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE
    max_concurrent: int = DEFAULT_MAX_CONCURRENT


class DiffProcessor:
    """Drops lock files and splits large diffs into groups for parallel work."""

    def __init__(self, config: ProcessorConfig | None = None) -> None:
        config = config or ProcessorConfig()
        self.config = ProcessorConfig(
            diff_size_threshold=config.diff_size_threshold
            if config.diff_size_threshold > 0
            else DEFAULT_DIFF_SIZE_THRESHOLD,
            max_chunk_size=config.max_chunk_size
            if config.max_chunk_size > 0
            else DEFAULT_MAX_CHUNK_SIZE,
            max_concurrent=config.max_concurrent
            if config.max_concurrent > 0
            else DEFAULT_MAX_CONCURRENT,
        )

    def process(self, chunks: Iterable[DiffChunk]) -> ProcessedDiff:
        """Filter lock files, measure the diff and chunk it when it is too large."""
        filtered = [chunk for chunk in chunks if not chunk.is_lock_file]
        total_size = sum(chunk.size for chunk in filtered)
        requires_chunking = total_size > self.config.diff_size_threshold

        result = ProcessedDiff(
            chunks=filtered,
            total_size=total_size,
            requires_chunking=requires_chunking,
        )
        if requires_chunking:
            result.chunks = [self._shrink_large_file(chunk) for chunk in filtered]
            result.chunk_groups = self._group_chunks(result.chunks)
            result.summary = self._summarize(result.chunks)
        return result

    def _shrink_large_file(self, chunk: DiffChunk) -> DiffChunk:
        if chunk.size > self.config.max_chunk_size:
            return replace(chunk, content=_file_summary(chunk))
        return chunk

    def _group_chunks(self, chunks: list[DiffChunk]) -> list[ChunkGroup]:
        if not chunks:
            return []
        group_count = min(self.config.max_concurrent, len(chunks))
        groups = []
        for start in range(group_count):
            members = chunks[start::group_count]
            groups.append(
                ChunkGroup(chunks=members, total_size=sum(c.size for c in members))
            )
        return [group for group in groups if group.chunks]

    @staticmethod
    def _summarize(chunks: list[DiffChunk]) -> str:
        if not chunks:
            return "No changes"
        lines = ["Summary of changes:\n"]
        for chunk in chunks:
            symbol = _CHANGE_SYMBOLS.get(chunk.change_type, "M")
            lines.append(
                f"  [{symbol}] {chunk.file_path} (+{chunk.additions}/-{chunk.deletions})\n"
            )
            if chunk.old_path:
                lines.append(f"      (renamed from {chunk.old_path})\n")
        additions = sum(chunk.additions for chunk in chunks)
        deletions = sum(chunk.deletions for chunk in chunks)
        lines.append(
            f"\nTotal: {len(chunks)} files, +{additions} additions, -{deletions} deletions\n"
        )
        return "".join(lines)


def _file_summary(chunk: DiffChunk) -> str:
    lines = [
        f"File: {chunk.file_path}\n",
        f"Change Type: {chunk.change_type}\n",
        f"Additions: +{chunk.additions}\n",
        f"Deletions: -{chunk.deletions}\n",
    ]
    if chunk.is_binary:
        lines.append("Note: Binary file (content not shown)\n")
    else:
        lines.append(
            f"Note: Large file ({chunk.size} bytes) - showing statistics only\n"
        )
    if chunk.old_path:
        lines.append(f"Renamed from: {chunk.old_path}\n")
    return "".join(lines)