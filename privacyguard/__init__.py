"""
Privacy Guard - PII and secret detection for commit workflows

Blocks commits and CI runs that would publish sensitive data:
- Credentials (API keys, passwords, JWT tokens)
- Financial and identity numbers (credit cards, SSNs)
- Personal information (emails, phone numbers, names, addresses)
- Infrastructure hints (connection strings, IP addresses) as warnings

Licensed under the Apache License 2.0
"""

__version__ = "1.0.0"


__all__ = [
    "__version__",
]
