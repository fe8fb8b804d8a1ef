"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build tagging prompts from user text and the allowed-tag vocabulary.
- Call Groq for a JSON reply, with timeout and bounded retry.
- Hand the raw reply back untouched; validation happens downstream.
"""
