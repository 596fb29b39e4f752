"""Relational persistence: ORM schema, engine bootstrap, repository, seeding."""
