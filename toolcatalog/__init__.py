"""
toolcatalog - Search and ranking engine for a personal AI-tool catalog

Catalog search with:
- Structured AND/OR filtering over keyword, category, rating and date
- Natural-language search: LLM intent extraction → relevance scoring
- Deterministic keyword fallback when the LLM is unavailable

Modules:
    core        - Configuration, schemas, errors, LLM client
    search      - Structured filter, intent extraction, scoring, NL pipeline
"""

__version__ = "0.3.0"
