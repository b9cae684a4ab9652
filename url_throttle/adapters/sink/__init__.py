"""Result sinks that show validation results and status messages to the user."""
