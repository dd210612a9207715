"""
LLM Providers Package
=====================

Provider implementations for the timeline-generation call.

Available providers:
- MockProvider: Deterministic, offline (tests and demos)
- GeminiProvider: Google Generative Language API
- OpenAIProvider: OpenAI Chat Completions
"""

from .base import (
    LLMProvider,
    ProviderVersion,
    ProviderResponse,
    ProviderErrorCode,
    InvocationParams,
)
from .http import HttpLLMProvider, ContentBlocked
from .mock import MockProvider
from .gemini import GeminiProvider
from .openai import OpenAIProvider

__all__ = [
    'LLMProvider',
    'ProviderVersion',
    'ProviderResponse',
    'ProviderErrorCode',
    'InvocationParams',
    'HttpLLMProvider',
    'ContentBlocked',
    'MockProvider',
    'GeminiProvider',
    'OpenAIProvider',
]
