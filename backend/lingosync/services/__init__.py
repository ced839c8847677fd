"""Business Logic Services.

This package contains all service modules that implement the core
business logic of LingoSync.

Service Categories:
- Session: debounced live translation orchestration
- History: bounded, persisted record of recent translations

External integrations:
- gemini: Gemini streaming/structured translation and speech playback
"""
