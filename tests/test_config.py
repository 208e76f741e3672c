import pytest

from palette_profile.config import AnalysisConfig


def test_defaults():
    config = AnalysisConfig()
    assert config.quantize_step == 32
    assert config.alpha_threshold == 128
    assert config.similarity_threshold == 40
    assert config.max_colors == 8
    assert config.workers == 1


@pytest.mark.parametrize("kwargs, field", [
    ({'quantize_step': 0}, 'quantize_step'),
    ({'quantize_step': 300}, 'quantize_step'),
    ({'alpha_threshold': -1}, 'alpha_threshold'),
    ({'similarity_threshold': -5}, 'similarity_threshold'),
    ({'max_colors': 0}, 'max_colors'),
    ({'workers': 0}, 'workers'),
])
def test_invalid_values_rejected(kwargs, field):
    with pytest.raises(ValueError, match=field):
        AnalysisConfig(**kwargs)


def test_from_env(monkeypatch):
    monkeypatch.setenv('PALETTE_QUANTIZE_STEP', '16')
    monkeypatch.setenv('PALETTE_SIMILARITY_THRESHOLD', '25.5')
    monkeypatch.setenv('PALETTE_WORKERS', '3')
    monkeypatch.delenv('PALETTE_MAX_COLORS', raising=False)
    monkeypatch.setenv('PALETTE_ALPHA_THRESHOLD', '')

    config = AnalysisConfig.from_env()

    assert config.quantize_step == 16
    assert config.similarity_threshold == 25.5
    assert config.workers == 3
    assert config.max_colors == 8
    assert config.alpha_threshold == 128


def test_from_env_rejects_non_numbers(monkeypatch):
    monkeypatch.setenv('PALETTE_MAX_COLORS', 'many')
    with pytest.raises(ValueError, match='PALETTE_MAX_COLORS'):
        AnalysisConfig.from_env()
