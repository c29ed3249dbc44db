from .openai import OpenAIProvider

__all__ = ["OpenAIProvider"]
