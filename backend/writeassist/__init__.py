"""
Writing Assistant proxy.

Routes grammar/style analysis requests to OpenAI, Anthropic or Gemini and
normalizes their responses.
"""

__version__ = "0.1.0"
