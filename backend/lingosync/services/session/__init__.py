"""
Session management module.

Provides the TranslationOrchestrator driving one live translation session
and the LiveSession that connects it to a WebSocket.
"""
from .orchestrator import SessionState, TranslationOrchestrator
from .live import LiveSession

__all__ = ["SessionState", "TranslationOrchestrator", "LiveSession"]
