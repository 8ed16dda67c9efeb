"""Juicebox: a small blogging backend with users, posts and tags."""
