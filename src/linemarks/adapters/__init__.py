"""Host adapters for the bookmark menu."""
