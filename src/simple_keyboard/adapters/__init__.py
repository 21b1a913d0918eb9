"""Host adapters for the keyboard engine."""
