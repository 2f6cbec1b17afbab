"""Helpers for handling API keys and other secrets safely."""

from __future__ import annotations

import re

_SK_PATTERN = r"sk-[a-zA-Z0-9]{20,}"

PROVIDER_PATTERNS: dict[str, re.Pattern[str] | None] = {
    "openai": re.compile(rf"^{_SK_PATTERN}$"),
    "deepseek": re.compile(rf"^{_SK_PATTERN}$"),
    "ollama": None,  # Ollama runs locally and needs no key
}

_MIN_KEY_LENGTH = 20

_MASK = "****"

_MASKING_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(_SK_PATTERN), "sk-" + _MASK),
    (re.compile(r"Bearer\s+[a-zA-Z0-9._-]+"), "Bearer " + _MASK),
    (
        re.compile(
            r"(api[_-]?key|apikey|api_secret|secret[_-]?key)\s*[:=]\s*[\"']?[a-zA-Z0-9._-]+[\"']?",
            re.IGNORECASE,
        ),
        r"\g<1>=" + _MASK,
    ),
    (
        re.compile(r"(password|passwd|pwd)\s*[:=]\s*[\"']?[^\s\"']+[\"']?", re.IGNORECASE),
        r"\g<1>=" + _MASK,
    ),
)

FIRST_USE_WARNING = """
⚠️  IMPORTANT SECURITY NOTICE ⚠️

GitSage sends your staged git diff content to external AI services
(OpenAI, DeepSeek, or other configured providers) to generate commit messages.

This means your code changes will be transmitted over the internet to third-party
servers. Please ensure you:

1. Do not stage sensitive information (API keys, passwords, secrets)
2. Review your staged changes before running GitSage
3. Consider using a local AI provider (Ollama) for sensitive projects

For more information, see the security section of the project documentation.

"""

FIRST_USE_ACKNOWLEDGMENT = (
    "Thank you for acknowledging the security notice. "
    "This warning will not be shown again."
)


def mask_api_key(key: str) -> str:
    """Mask a key so that only its last four characters remain visible."""
    if len(key) <= 4:
        return _MASK
    return "*" * (len(key) - 4) + key[-4:]


def validate_api_key_format(provider: str, api_key: str) -> None:
    """Raise ValueError if the key does not look valid for the provider."""
    if provider == "ollama":
        return
    if not api_key:
        raise ValueError(f"API key is required for {provider} provider")
    if len(api_key) < _MIN_KEY_LENGTH:
        raise ValueError("API key appears to be invalid (too short)")
    pattern = PROVIDER_PATTERNS.get(provider)
    if pattern is not None and not pattern.match(api_key):
        raise ValueError(
            f"API key format appears invalid for {provider} provider (expected format: sk-...)"
        )


def sanitize_for_logging(s: str) -> str:
    """Mask API keys, bearer tokens and passwords found in the text."""
    result = s
    for pattern, replacement in _MASKING_RULES:
        result = pattern.sub(replacement, result)
    return result