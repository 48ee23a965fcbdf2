"""In-memory floor manager for restaurant tables and tickets."""
