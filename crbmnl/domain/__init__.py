"""Render pipeline tying the collaborators to the rendering core."""
