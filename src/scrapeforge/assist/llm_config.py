"""
llm_config.py
=============
LLM provider configuration for the AI suggestion service.

Supports Groq, Gemini and OpenAI through pydantic-ai models.
"""

import os
from dataclasses import dataclass
from typing import Any

from pydantic_ai.models import Model
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.groq import GroqModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.groq import GroqProvider
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

from scrapeforge.exceptions import JobConfigError

# Environment variable holding the API key of each provider
API_KEY_VARS = {
    'groq': 'GROQ_KEY',
    'gemini': 'GEMINI_KEY',
    'openai': 'OPENAI_KEY',
}

DEFAULT_MODELS = {
    'groq': 'llama-3.3-70b-versatile',
    'gemini': 'gemini-2.5-flash',
    'openai': 'gpt-4o-mini',
}


@dataclass
class LLMConfig:
    """Configuration for an LLM provider.

    Attributes:
        provider: Provider name ('groq', 'gemini' or 'openai')
        model_name: Model identifier string
        api_key: API key for authentication
        temperature: Sampling temperature (0.0-2.0). Defaults to 0.2.
        max_tokens: Maximum tokens for generation. Defaults to None.
        extra_params: Additional model settings. Defaults to None.
    """

    provider: str
    model_name: str
    api_key: str
    temperature: float = 0.2
    max_tokens: int | None = None
    extra_params: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            ValueError: If API key or model name is missing.
        """
        if not self.api_key:
            raise ValueError(f'API key required for {self.provider}')
        if not self.model_name:
            raise ValueError(f'Model name required for {self.provider}')

    def model_settings(self) -> ModelSettings:
        """Generation settings passed to the pydantic-ai model."""
        settings: dict[str, Any] = {'temperature': self.temperature}
        if self.max_tokens:
            settings['max_tokens'] = self.max_tokens
        if self.extra_params:
            settings.update(self.extra_params)
        return ModelSettings(**settings)


def create_groq_model(config: LLMConfig) -> GroqModel:
    """Create a Groq model from configuration."""
    return GroqModel(
        config.model_name,
        provider=GroqProvider(api_key=config.api_key),
        settings=config.model_settings(),
    )


def create_gemini_model(config: LLMConfig) -> GoogleModel:
    """Create a Gemini (Google) model from configuration."""
    return GoogleModel(
        config.model_name,
        provider=GoogleProvider(api_key=config.api_key),
        settings=config.model_settings(),
    )


def create_openai_model(config: LLMConfig) -> OpenAIChatModel:
    """Create an OpenAI chat model from configuration."""
    return OpenAIChatModel(
        config.model_name,
        provider=OpenAIProvider(api_key=config.api_key),
        settings=config.model_settings(),
    )


PROVIDER_FACTORIES = {
    'groq': create_groq_model,
    'gemini': create_gemini_model,
    'google': create_gemini_model,  # Alias
    'openai': create_openai_model,
}


def create_model(config: LLMConfig) -> Model:
    """
    Create a model from configuration.

    Args:
        config: LLMConfig specifying the provider and parameters

    Returns:
        Model instance (GroqModel, GoogleModel or OpenAIChatModel)

    Raises:
        ValueError: If provider is not supported

    """
    provider_name = config.provider.lower()

    if provider_name not in PROVIDER_FACTORIES:
        available = ', '.join(PROVIDER_FACTORIES.keys())
        raise ValueError(f'Unknown provider: {provider_name}. Available: {available}')

    return PROVIDER_FACTORIES[provider_name](config)


def config_from_env(provider: str = 'gemini', model_name: str | None = None) -> LLMConfig:
    """Build an LLMConfig from the provider's API key environment variable.

    Args:
        provider: Provider name ('groq', 'gemini' or 'openai')
        model_name: Model identifier, defaults to the provider's default model

    Returns:
        Configured LLMConfig.

    Raises:
        JobConfigError: If the provider is unknown or its key is not set.

    """
    provider = provider.lower()
    if provider not in API_KEY_VARS:
        raise JobConfigError('environment', f'unknown AI provider {provider!r}')

    key_var = API_KEY_VARS[provider]
    api_key = os.getenv(key_var, '')
    if not api_key:
        raise JobConfigError('environment', f'{key_var} is not set')

    return LLMConfig(provider=provider, model_name=model_name or DEFAULT_MODELS[provider], api_key=api_key)
