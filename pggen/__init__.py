"""Field sets, not-found errors, SQL statement builders, client wrappers and generator options for PostgreSQL data access."""

__version__ = "0.1.0"