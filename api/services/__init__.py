# Copyright (c) 2024 RAG-KB Contributors
# SPDX-License-Identifier: MIT

"""Services layer: clients for the external collaborators.

- GitHubSourceProvider: repository listings and raw file content
- OllamaService: prompt completion and health checks
"""

from .source_provider import GitHubSourceProvider, SourceProviderError
from .ollama_client import OllamaService, GenerationError

__all__ = ['GitHubSourceProvider', 'SourceProviderError', 'OllamaService', 'GenerationError']
