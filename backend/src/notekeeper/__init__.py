"""
Notekeeper Backend - notes with public/private visibility

Small REST backend: account registration and login with JWT issuance,
plus owner-scoped CRUD on notes.
"""

__version__ = "1.0.0"
