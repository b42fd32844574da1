"""Chat endpoint blueprints, mounted under the chat blueprint."""
