"""Core infrastructure shared by the collaborators and the server."""
