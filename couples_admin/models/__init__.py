"""
ORM models for the admin panel.
"""

from .category import Category
from .question import Question

__all__ = [
    "Category",
    "Question",
]
