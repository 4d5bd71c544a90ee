"""Channel registry service: CRUD over chat-platform channel configuration records."""
