import pytest
from pydantic_ai.models.groq import GroqModel
from pydantic_ai.models.openai import OpenAIChatModel

from scrapeforge.assist import LLMConfig, config_from_env, create_model
from scrapeforge.exceptions import JobConfigError


def test_config_requires_api_key():
    with pytest.raises(ValueError, match='API key required'):
        LLMConfig(provider='groq', model_name='llama', api_key='')


def test_model_settings_carry_temperature_and_extras():
    config = LLMConfig(
        provider='openai', model_name='gpt-4o-mini', api_key='k', max_tokens=256, extra_params={'top_p': 0.9}
    )

    assert config.model_settings() == {'temperature': 0.2, 'max_tokens': 256, 'top_p': 0.9}


def test_create_model_per_provider():
    assert isinstance(create_model(LLMConfig(provider='groq', model_name='llama', api_key='k')), GroqModel)
    assert isinstance(create_model(LLMConfig(provider='OpenAI', model_name='gpt-4o-mini', api_key='k')), OpenAIChatModel)


def test_create_model_rejects_unknown_provider():
    with pytest.raises(ValueError, match='Unknown provider'):
        create_model(LLMConfig(provider='nope', model_name='m', api_key='k'))


def test_config_from_env(monkeypatch):
    monkeypatch.setenv('GROQ_KEY', 'secret')

    config = config_from_env('groq')

    assert config.api_key == 'secret'
    assert config.model_name == 'llama-3.3-70b-versatile'


def test_config_from_env_missing_key(monkeypatch):
    monkeypatch.delenv('GEMINI_KEY', raising=False)

    with pytest.raises(JobConfigError, match='GEMINI_KEY is not set'):
        config_from_env('gemini')


def test_config_from_env_unknown_provider():
    with pytest.raises(JobConfigError, match='unknown AI provider'):
        config_from_env('mistral')
