"""
API v1 routers.
"""

from workflow_radar.api.v1 import analysis, health, interpret, models, suggestions

__all__ = ["analysis", "health", "interpret", "models", "suggestions"]
