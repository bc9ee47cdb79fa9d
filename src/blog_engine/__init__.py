"""Blog Engine: a CRUD blog backend with users, posts, comments and favorites."""

__version__ = "0.1.0"
