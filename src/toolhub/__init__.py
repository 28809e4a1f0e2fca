"""ToolHub - REST API for users and a catalogue of tools.

Users sign up and log in with a password hashed by Argon2 and receive a
JWT access token. Authenticated users manage users and tools; creating
users through the API is reserved for owners.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
