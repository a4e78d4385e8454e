"""Client-side note cache, search and synchronization engine for the notes API."""
