"""Core abstractions.

- Contracts (Protocol) implemented by the concrete adapters.
- The workflow depends on these, never on httpx/pymysql/aiosmtplib directly.
"""
