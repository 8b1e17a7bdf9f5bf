from .chat import ChatMessage, ChatRequest, ChatResponse, Role

__all__ = ["ChatMessage", "ChatRequest", "ChatResponse", "Role"]
