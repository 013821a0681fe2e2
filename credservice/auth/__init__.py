"""
Authentication service for the credential service.

This module provides:
- Registration input validation
- An in-memory credential store with username and email uniqueness
- bcrypt password hashing and verification
- Register and login HTTP routes
"""
