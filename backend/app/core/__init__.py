# app/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- db: Database configuration and connection management
- errors: Application error taxonomy
- log_setup: Logging configuration
- security: Password hashing, password policy and session tokens
"""
