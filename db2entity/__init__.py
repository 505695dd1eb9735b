"""db2entity: generate ORM entity classes from a database schema."""

__version__ = "0.1.0"
