"""Item catalog: listed items, substring search and renter comments."""
