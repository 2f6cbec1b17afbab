# gitsage

Library pieces for a tool that writes git commit messages from staged
diffs with the help of an AI provider. Everything here uses only the
standard library.

## What is in the package

- `gitsage.processor` – prepares a diff before it is sent off:
  `DiffProcessor.process()` drops chunks marked as lock files, sums the
  size of the rest in UTF-8 bytes, and when that exceeds
  `ProcessorConfig.diff_size_threshold` (10 KiB by default) it replaces
  files larger than `max_chunk_size` (100 KiB) with a statistics summary,
  spreads the chunks round-robin over at most `max_concurrent` (3)
  `ChunkGroup`s and writes an overall summary (`[A]`, `[M]`, `[D]`, `[R]`
  per file plus totals). Zero or negative settings fall back to the
  defaults.
- `gitsage.security` – `mask_api_key()` hides all but the last four
  characters, `validate_api_key_format()` raises `ValueError` when a key is
  missing, shorter than 20 characters or not of the `sk-...` form for
  `openai` and `deepseek` (`ollama` needs no key), and
  `sanitize_for_logging()` masks `sk-` keys, bearer tokens, API-key and
  password assignments in text.
- `gitsage.pathcheck` – PATH handling:
  - `shell`: `ShellType`, `PathAddResult` and
    `generate_export_statement_for_shell()`, which writes the profile
    snippet (`export PATH=...` for bash, zsh and unknown shells,
    `set -gx PATH ...` for fish).
  - `checker`: `new_checker()` returns a `UnixChecker` or a
    `WindowsChecker` for the running (or a given) executable.
    `is_in_path()` compares normalised PATH entries with the executable's
    directory (case-insensitively on Windows). `add_to_path()` appends the
    export statement to `~/.bashrc` (or an existing `~/.bash_profile`),
    `~/.zshrc`, `~/.config/fish/config.fish` or `~/.profile` depending on
    `$SHELL`, keeping the file's permissions; on Windows it runs `setx`
    on the user PATH and refuses values over 1024 characters.
    `detect_shell()` classifies a shell path.
  - `errors`: `PathCheckError` with a `PathErrorCode`, raised when a
    profile directory cannot be created, a profile cannot be written, the
    home directory is unknown, `setx` fails or PATH would be too long.
  - `instructions`: `get_manual_instructions()` builds step-by-step manual
    instructions for a platform and shell; `format_instructions()` renders
    them in Chinese and `format_instructions_english()` in English.
- `gitsage.ui` – terminal presentation:
  - `manager`: `CommitMessage`, `Action`, `DefaultManager` and
    `NonInteractiveManager`. `DefaultManager` prints the message, asks for
    an action (1–4, the action name or its first letter, Enter to accept,
    `q` to cancel), opens the configured editor, `$EDITOR` or `$VISUAL`
    and falls back to inline editing, and asks yes/no questions. With
    `auto_accept=True` it accepts without asking. `NonInteractiveManager`
    prints plainly, accepts every action and leaves messages unedited.
    `format_message_for_edit()` and `parse_edited_message()` convert
    between a message and its text (parts separated by blank lines).
  - `spinner`: `Spinner` and `ProgressSpinner` draw an animation on
    standard error from a background thread; both work as context
    managers, and `ProgressSpinner` adds a bar, a `current/total` counter
    and the current file name.

## Examples

```python
from gitsage.security import mask_api_key, sanitize_for_logging

mask_api_key("placeholder")            # '*******lder'
sanitize_for_logging("Bearer token")   # 'Bearer ****'
```

```python
from gitsage.processor import DiffChunk, DiffProcessor

result = DiffProcessor().process([
    DiffChunk(file_path="main.go", content="+fmt.Println()\n"),
    DiffChunk(file_path="go.sum", content="...", is_lock_file=True),
])
[c.file_path for c in result.chunks]   # ['main.go']
result.requires_chunking               # False
```

```python
from gitsage.pathcheck.checker import new_checker

checker = new_checker()
if not checker.is_in_path():
    print(checker.add_to_path().message)
```

```python
from gitsage.ui.manager import CommitMessage, DefaultManager

ui = DefaultManager(color_enabled=True, editor="", auto_accept=False)
message = CommitMessage(subject="feat: add diff summary")
ui.display_message(message)
action = ui.prompt_action()
```

## What the package does not do

It has no command-line program. It does not read diffs from git, does not
decide which files are lock files (callers set `DiffChunk.is_lock_file`),
does not talk to any AI provider, does not create commits, and keeps no
configuration file or setup wizard. These are left to the application
that uses it.

## Tests

The tests use pytest and hypothesis, listed in the `test` extra:

```
pip install -e .[test]
pytest
```