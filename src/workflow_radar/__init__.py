"""
Workflow Radar: correlates tracker events into workflows and synthesizes insights.
"""

__version__ = "0.1.0"
