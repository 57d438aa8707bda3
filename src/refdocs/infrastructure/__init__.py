"""Infrastructure layer: file/HTTP retrieval and index artifact loading.

This layer depends on stdlib and third-party libs (httpx, structlog).
Parsing rules live in the domain layer; this layer only performs I/O.
"""
