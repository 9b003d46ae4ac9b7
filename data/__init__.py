"""Sample data used to seed an empty database."""
