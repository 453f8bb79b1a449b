import pytest

from editstream.cleaner import DEFAULT_CLEANER, CodeCleaner
from editstream.config import DEFAULT_CONFIG, ParserConfig
from editstream.errors import ConfigError


def test_defaults():
    assert DEFAULT_CONFIG.context_window == 300
    assert DEFAULT_CONFIG.replace_lookahead == 500
    assert DEFAULT_CONFIG.snippet_length == 200
    assert DEFAULT_CONFIG.protected_paths == ()
    assert DEFAULT_CONFIG.get_cleaner() is DEFAULT_CLEANER


@pytest.mark.parametrize("field", ["context_window", "replace_lookahead", "key_snippet_length"])
def test_non_positive_windows_are_rejected(field):
    with pytest.raises(ConfigError):
        ParserConfig(**{field: 0})


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        ParserConfig(min_block_length=-1)


def test_protected_paths_are_normalised_to_a_tuple():
    cfg = ParserConfig(protected_paths=[".env", "secrets/"])
    assert cfg.protected_paths == (".env", "secrets/")
    with pytest.raises(ConfigError):
        ParserConfig(protected_paths=".env")


def test_custom_cleaner_is_used():
    cleaner = CodeCleaner(patterns=())
    assert ParserConfig(cleaner=cleaner).get_cleaner() is cleaner
