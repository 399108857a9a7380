"""
Authentication package for Deep Thoughts.

Provides:
- bcrypt password hashing and verification
- JWT session token creation and validation
- Per-request identity resolution from the bearer token
"""
