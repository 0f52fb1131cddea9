"""
API route modules.
"""

from writeassist.api.routes import health, models, proxy, suggestions

__all__ = ["health", "models", "proxy", "suggestions"]
