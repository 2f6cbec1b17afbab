from hypothesis import given, settings
from hypothesis import strategies as st

from gitsage.processor import (
    DEFAULT_MAX_CHUNK_SIZE,
    DEFAULT_MAX_CONCURRENT,
    ChangeType,
    DiffChunk,
    DiffProcessor,
    ProcessorConfig,
)

LOCK_FILE_NAMES = [
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "go.sum",
    "Cargo.lock",
    "Gemfile.lock",
    "composer.lock",
    "poetry.lock",
    "Pipfile.lock",
]

REGULAR_EXTENSIONS = [
    ".go", ".js", ".ts", ".py", ".java", ".rs", ".rb", ".php",
    ".md", ".txt", ".json", ".yaml", ".yml", ".toml", ".xml",
    ".css", ".html", ".vue", ".jsx", ".tsx",
]


def _content_of_size(size):
    return "@@ -1,10 +1,15 @@\n" + "+added line content\n" * (size // 20)


regular_names = st.builds(
    lambda length, ext: "".join(chr(ord("a") + i % 26) for i in range(length)) + ext,
    st.integers(4, 12),
    st.sampled_from(REGULAR_EXTENSIONS),
)
diff_contents = st.integers(50, 500).map(
    lambda length: "@@ -1,10 +1,15 @@\n" + ("+added line " + "x" * 10 + "\n") * (length // 20)
)


def _chunk_strategy(names, contents, lock):
    return st.builds(
        lambda name, content, adds, dels: DiffChunk(
            file_path=name,
            content=content,
            additions=adds,
            deletions=dels,
            change_type=ChangeType.MODIFIED,
            is_lock_file=lock,
        ),
        names,
        contents,
        st.integers(1, 100),
        st.integers(0, 50),
    )


lock_chunks = _chunk_strategy(st.sampled_from(LOCK_FILE_NAMES), diff_contents, True)
regular_chunks = _chunk_strategy(regular_names, diff_contents, False)
mixed_chunks = st.builds(
    lambda locks, regulars: locks + regulars,
    st.lists(lock_chunks, min_size=1, max_size=3),
    st.lists(regular_chunks, min_size=1, max_size=5),
)

TEST_THRESHOLD = 1024


def _sized_chunks(count_range, size_bounds):
    def build(n):
        low, high = size_bounds(n)
        sized = _chunk_strategy(
            regular_names, st.integers(low, high).map(_content_of_size), False
        )
        return st.lists(sized, min_size=n, max_size=n)

    return st.integers(*count_range).flatmap(build)


exceeding_chunks = _sized_chunks(
    (2, 5),
    lambda n: (TEST_THRESHOLD // n + 100, TEST_THRESHOLD // n + 600),
)
below_chunks = _sized_chunks(
    (1, 3),
    lambda n: (50, max(50, TEST_THRESHOLD // (n + 1) - 100)),
)


def _threshold_processor():
    return DiffProcessor(
        ProcessorConfig(
            diff_size_threshold=TEST_THRESHOLD,
            max_chunk_size=DEFAULT_MAX_CHUNK_SIZE,
            max_concurrent=DEFAULT_MAX_CONCURRENT,
        )
    )


def test_filter_lock_files():
    chunks = [
        DiffChunk(file_path="main.go", is_lock_file=False),
        DiffChunk(file_path="go.sum", is_lock_file=True),
        DiffChunk(file_path="package-lock.json", is_lock_file=True),
        DiffChunk(file_path="src/app.ts", is_lock_file=False),
    ]
    result = DiffProcessor().process(chunks)
    assert [c.file_path for c in result.chunks] == ["main.go", "src/app.ts"]
    assert not any(c.is_lock_file for c in result.chunks)


def test_calculate_total_size():
    chunks = [
        DiffChunk(file_path="file1.go", content="content1"),
        DiffChunk(file_path="file2.go", content="content22"),
    ]
    assert DiffProcessor().process(chunks).total_size == 17


def test_small_diff_no_chunking():
    result = DiffProcessor().process([DiffChunk(file_path="small.go", content="small content")])
    assert result.requires_chunking is False
    assert result.chunk_groups == []
    assert result.summary == ""


def test_large_diff_requires_chunking():
    processor = DiffProcessor(
        ProcessorConfig(diff_size_threshold=100, max_chunk_size=50, max_concurrent=3)
    )
    result = processor.process([DiffChunk(file_path="large.go", content="x" * 150)])
    assert result.requires_chunking is True


def test_group_chunks():
    processor = DiffProcessor(
        ProcessorConfig(diff_size_threshold=10, max_chunk_size=1000, max_concurrent=2)
    )
    chunks = [
        DiffChunk(file_path=f"file{i}.go", content=letter * 20)
        for i, letter in enumerate("abcd", start=1)
    ]
    result = processor.process(chunks)
    assert len(result.chunk_groups) == 2
    for group in result.chunk_groups:
        assert len(group.chunks) == 2
        assert group.total_size == 40
    assert [c.file_path for c in result.chunk_groups[0].chunks] == ["file1.go", "file3.go"]


def test_process_large_files():
    processor = DiffProcessor(
        ProcessorConfig(diff_size_threshold=10, max_chunk_size=50, max_concurrent=3)
    )
    chunk = DiffChunk(
        file_path="large.go",
        content="x" * 100,
        change_type=ChangeType.MODIFIED,
        additions=50,
        deletions=10,
    )
    result = processor.process([chunk])
    assert len(result.chunks) == 1
    content = result.chunks[0].content
    assert "large.go" in content
    assert "+50" in content
    assert "-10" in content
    assert chunk.content == "x" * 100


def test_generate_summary():
    processor = DiffProcessor(
        ProcessorConfig(diff_size_threshold=10, max_chunk_size=1000, max_concurrent=3)
    )
    chunks = [
        DiffChunk("added.go", "a" * 20, 100, 0, ChangeType.ADDED),
        DiffChunk("modified.go", "m" * 20, 50, 30, ChangeType.MODIFIED),
        DiffChunk("deleted.go", "d" * 20, 0, 75, ChangeType.DELETED),
    ]
    summary = processor.process(chunks).summary
    assert "[A]" in summary
    assert "[M]" in summary
    assert "[D]" in summary
    assert "3 files" in summary


def test_empty_chunks():
    result = DiffProcessor().process([])
    assert result.chunks == []
    assert result.total_size == 0
    assert result.requires_chunking is False


def test_renamed_file_in_summary():
    processor = DiffProcessor(
        ProcessorConfig(diff_size_threshold=10, max_chunk_size=1000, max_concurrent=3)
    )
    chunk = DiffChunk(
        file_path="new_name.go",
        old_path="old_name.go",
        change_type=ChangeType.RENAMED,
        additions=5,
        deletions=2,
        content="r" * 20,
    )
    summary = processor.process([chunk]).summary
    assert "[R]" in summary
    assert "old_name.go" in summary


def test_binary_file_in_summary():
    processor = DiffProcessor(
        ProcessorConfig(diff_size_threshold=10, max_chunk_size=20, max_concurrent=3)
    )
    chunk = DiffChunk(
        file_path="image.png",
        change_type=ChangeType.ADDED,
        is_binary=True,
        content="b" * 50,
    )
    assert "Binary file" in processor.process([chunk]).chunks[0].content


def test_non_positive_config_falls_back_to_defaults():
    processor = DiffProcessor(
        ProcessorConfig(diff_size_threshold=0, max_chunk_size=-1, max_concurrent=0)
    )
    assert processor.config == ProcessorConfig()


@settings(max_examples=100)
@given(mixed_chunks)
def test_lock_files_excluded(chunks):
    result = DiffProcessor().process(chunks)
    lock_paths = {c.file_path for c in chunks if c.is_lock_file}
    assert not any(c.is_lock_file for c in result.chunks)
    assert not any(c.file_path in lock_paths for c in result.chunks)
    assert len(result.chunks) == sum(1 for c in chunks if not c.is_lock_file)


@settings(max_examples=100)
@given(st.lists(lock_chunks, min_size=1, max_size=5))
def test_only_lock_files_results_in_empty(chunks):
    assert DiffProcessor().process(chunks).chunks == []


@settings(max_examples=100)
@given(st.lists(regular_chunks, min_size=1, max_size=5))
def test_only_regular_files_preserved(chunks):
    assert len(DiffProcessor().process(chunks).chunks) == len(chunks)


@settings(max_examples=100)
@given(exceeding_chunks)
def test_exceeding_threshold_triggers_chunking(chunks):
    assert sum(len(c.content) for c in chunks) > TEST_THRESHOLD
    result = _threshold_processor().process(chunks)
    assert result.requires_chunking is True
    assert 0 < len(result.chunk_groups) <= DEFAULT_MAX_CONCURRENT
    assert sum(len(g.chunks) for g in result.chunk_groups) == len(result.chunks)
    assert result.summary


@settings(max_examples=100)
@given(below_chunks)
def test_below_threshold_no_chunking(chunks):
    assert sum(len(c.content) for c in chunks) <= TEST_THRESHOLD
    result = _threshold_processor().process(chunks)
    assert result.requires_chunking is False
    assert result.chunk_groups == []