"""Account, session, project and cascade-delete operations."""
