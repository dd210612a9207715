"""
Model Adapter Package

ARCHITECTURAL BOUNDARY:
=======================
This package is the ONLY interface between the backend pipeline and
hosted language models. All model traffic flows through it.

DIRECTION OF DEPENDENCY:
========================
backend -> adapter -> model API

NEVER:
- adapter importing from backend
- backend calling a model API directly

DESIGN PRINCIPLES:
==================
1. Prompt in, raw text out - no parsing of model output here
2. Prompts are canonical and hashed
3. Provider failures are explicit responses, never exceptions
"""

from .prompts import CanonicalPrompt, PromptTemplates
from .providers import (
    LLMProvider,
    ProviderVersion,
    ProviderResponse,
    ProviderErrorCode,
    InvocationParams,
    MockProvider,
    GeminiProvider,
    OpenAIProvider,
)

__all__ = [
    # Prompts
    'CanonicalPrompt', 'PromptTemplates',
    # Providers
    'LLMProvider', 'ProviderVersion', 'ProviderResponse', 'ProviderErrorCode',
    'InvocationParams', 'MockProvider', 'GeminiProvider', 'OpenAIProvider',
]
