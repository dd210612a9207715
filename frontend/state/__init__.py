"""
State Layer

Responsibility:
Ownership of what is currently displayed. No rendering logic here.
"""

from .session import DisplaySession, DisplayedChart, slugify

__all__ = ['DisplaySession', 'DisplayedChart', 'slugify']
