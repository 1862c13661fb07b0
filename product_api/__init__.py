"""Product API: CRUD over a product document store."""
