"""
External service clients.
"""

from .gemini_client import review_diagram, GeminiResponse

__all__ = ['review_diagram', 'GeminiResponse']
