"""Route handlers following Single Responsibility Principle

Each router module handles a single resource/concept:
- chat: question answering
- admin: indexing triggers, repository status, store statistics
- health: engine health probe
"""
