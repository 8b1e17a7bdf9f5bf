from .base import LLMClient
from .errors import DecodeError, InferenceError, TransportError
from .factory import build_llm
from .ollama import OllamaLLM

__all__ = ["DecodeError", "InferenceError", "LLMClient", "OllamaLLM", "TransportError", "build_llm"]
