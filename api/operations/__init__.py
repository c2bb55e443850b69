"""Operations layer for the documentation assistant.

This package handles the RAG core operations:
- Indexing runs (IndexOrchestrator, DocumentIndexer)
- Retrieval (RetrievalCascade)
- Prompt assembly (PromptBuilder) and source labels (SourceLabelSanitizer)
- Chat query handling (ChatExecutor)

Principles:
- Single Responsibility Principle
- Dependency Injection
"""
