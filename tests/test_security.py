import pytest

from gitsage.security import (
    mask_api_key,
    sanitize_for_logging,
    validate_api_key_format,
)


def _provider_style(body):
    return "sk-" + body


def test_mask_short_key_is_fully_hidden():
    assert mask_api_key("abc") == "****"
    assert mask_api_key("abcd") == "****"


def test_mask_keeps_last_four_characters():
    key = "placeholder"
    masked = mask_api_key(key)
    assert len(masked) == len(key)
    assert masked.endswith(key[-4:])
    assert set(masked[:-4]) == {"*"}


def test_validate_ollama_accepts_empty_key():
    assert validate_api_key_format("ollama", "") is None


def test_validate_accepts_well_formed_key():
    assert validate_api_key_format("openai", _provider_style("placeholder" * 2)) is None
    assert validate_api_key_format("deepseek", _provider_style("placeholder" * 2)) is None


def test_validate_missing_key():
    with pytest.raises(ValueError, match="API key is required for openai provider"):
        validate_api_key_format("openai", "")


def test_validate_too_short():
    with pytest.raises(ValueError, match="too short"):
        validate_api_key_format("openai", "placeholder")


def test_validate_wrong_format():
    with pytest.raises(ValueError, match="expected format: sk-"):
        validate_api_key_format("deepseek", "placeholder" * 2)


def test_validate_unknown_provider_only_checks_length():
    assert validate_api_key_format("custom", "placeholder" * 2) is None
    with pytest.raises(ValueError, match="too short"):
        validate_api_key_format("custom", "token")


def test_sanitize_masks_provider_keys():
    text = "using " + _provider_style("placeholder" * 2) + " now"
    result = sanitize_for_logging(text)
    assert "sk-****" in result
    assert "placeholder" not in result
    assert result.startswith("using ")
    assert result.endswith(" now")


def test_sanitize_masks_bearer_tokens():
    result = sanitize_for_logging("Authorization: Bearer token")
    assert "Bearer ****" in result
    assert "token" not in result


def test_sanitize_masks_password_assignments():
    result = sanitize_for_logging("PASSWORD: secret")
    assert "secret" not in result
    assert result.startswith("PASSWORD=****")


def test_sanitize_masks_generic_api_key_assignments():
    result = sanitize_for_logging("api_key = 'placeholder'")
    assert "placeholder" not in result
    assert "api_key=****" in result


def test_sanitize_leaves_plain_text_untouched():
    text = "refactor the diff processor"
    assert sanitize_for_logging(text) == text