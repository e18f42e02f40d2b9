"""
Shared enums for entities.

This module contains enums that are used across multiple entity and DTO files.
"""

from enum import Enum


class Role(str, Enum):
    """User roles. New accounts are always learners."""

    LEARNER = "learner"
    ADMIN = "admin"


class Category(str, Enum):
    """Fixed set of resource categories."""

    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    DATA_SCIENCE = "Data Science"
    MACHINE_LEARNING = "Machine Learning"
    PROGRAMMING_LANGUAGES = "Programming Languages"
    DATABASE = "Database"
    DEVOPS = "DevOps"
    UI_UX_DESIGN = "UI/UX Design"
    CYBERSECURITY = "Cybersecurity"
    OTHER = "Other"


class ResourceSort(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    RATING = "rating"
    LIKES = "likes"
