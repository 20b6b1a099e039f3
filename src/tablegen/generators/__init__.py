"""Output generators that render the injected context."""
