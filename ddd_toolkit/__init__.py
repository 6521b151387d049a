"""Domain-Driven-Design building blocks on SQLAlchemy."""
