"""Tests for configuration settings."""
from dataclasses import replace

import pytest

from wordwhiz.config import Settings, WORD_LISTS, settings


def test_settings_defaults():
    """Test default settings values."""
    assert settings.quiz.questions_per_quiz == 10
    assert settings.quiz.options_per_question == 4
    assert settings.quiz.default_tier == "intermediate"
    assert settings.learning.recent_window_days == 7
    assert settings.learning.review_after_days == 3
    assert settings.storage.learned_words_key != settings.storage.quiz_stats_key


def test_settings_from_env(monkeypatch):
    """Test that settings can be overridden by environment variables."""
    monkeypatch.setenv("THESAURUS_API_KEY", "test_key_123")

    # Dataclass defaults are read at import, so reload the module
    import importlib
    import wordwhiz.config
    original = dict(vars(wordwhiz.config))
    reloaded = importlib.reload(wordwhiz.config)
    try:
        assert reloaded.Settings().thesaurus.api_key == "test_key_123"
    finally:
        monkeypatch.delenv("THESAURUS_API_KEY")
        importlib.reload(wordwhiz.config)
        # Put back the original objects other modules already imported
        vars(wordwhiz.config).update(original)


def test_word_lists_are_valid_words():
    for words in WORD_LISTS.values():
        assert len(set(words)) == len(words)
        assert all(word.isalpha() and word.islower() for word in words)


@pytest.mark.parametrize("quiz_changes", [
    {"questions_per_quiz": 0},
    {"options_per_question": 1},
    {"max_attempts_per_question": 0},
    {"default_tier": "expert"},
])
def test_validate_rejects_bad_quiz_settings(quiz_changes):
    bad = Settings(quiz=replace(settings.quiz, **quiz_changes))
    with pytest.raises(ValueError):
        bad.validate()


def test_validate_rejects_bad_retry_attempts():
    bad = Settings(thesaurus=replace(settings.thesaurus, retry_attempts=0))
    with pytest.raises(ValueError):
        bad.validate()
