"""Domain models and rules.

- Pure, strict data structures (Pydantic v2) and validation functions.
- The domain knows nothing about HTTP, SMTP, MySQL or the CLI.
"""
