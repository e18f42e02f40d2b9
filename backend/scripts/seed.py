#!/usr/bin/env python3
"""
Seed a local database with demo accounts and resources.

Accounts and resources go through the services, so passwords are hashed
and every field is validated exactly as through the API.

Run from the backend/ directory (or with the project pip-installed):
    python scripts/seed.py
"""

import logging
import sys

# Add parent directory to path for imports
sys.path.insert(0, ".")

from resource_hub.core.exceptions import DuplicateEmailError
from resource_hub.database.ensure_indexes import ensure_indexes
from resource_hub.database.mongo import get_database
from resource_hub.entities.enums import Category, Role
from resource_hub.repositories.user import UserRepository
from resource_hub.services.auth_service import AuthService
from resource_hub.services.resource_service import ResourceService

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger("seed")

ACCOUNTS = [
    ("Admin User", "admin@example.com", "admin123", Role.ADMIN),
    ("Learner User", "learner@example.com", "learner123", Role.LEARNER),
]

RESOURCES = [
    (
        "Intro to Go",
        "A tour of the Go programming language for newcomers.",
        Category.PROGRAMMING_LANGUAGES,
        "https://go.dev/tour",
    ),
    (
        "Python for Data Analysis",
        "Pandas, NumPy and Jupyter for everyday data wrangling.",
        Category.DATA_SCIENCE,
        "https://wesmckinney.com/book/",
    ),
    (
        "MDN Web Docs",
        "Reference and guides for HTML, CSS and JavaScript.",
        Category.WEB_DEVELOPMENT,
        "https://developer.mozilla.org",
    ),
    (
        "OWASP Top Ten",
        "The most critical security risks to web applications.",
        Category.CYBERSECURITY,
        "https://owasp.org/www-project-top-ten/",
    ),
]


def main():
    db = get_database()
    ensure_indexes(db)

    auth = AuthService(db)
    users = UserRepository(db)

    for name, email, password, role in ACCOUNTS:
        try:
            auth.register(name, email, password)
            logger.info("Created %s", email)
        except DuplicateEmailError:
            logger.info("%s already exists, skipping", email)
        if role == Role.ADMIN:
            users.set_role(email, Role.ADMIN)

    learner = users.find_identity(users.find_by_email("learner@example.com").id)
    service = ResourceService(db)
    for title, description, category, link in RESOURCES:
        created = service.create(learner, title, description, category.value, link)
        logger.info("Created resource %s (%s)", created.title, created.id)


if __name__ == "__main__":
    main()
