"""
LLM provider adapters (infra). Import concrete adapters from their module,
e.g. `from infra.llm.ollama import OllamaLLM`.
"""

__all__ = []
