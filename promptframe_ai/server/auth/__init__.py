"""
Authentication for the PromptFrame-AI server.

- passwords: scrypt password hashing compatible with existing accounts
- sessions: cookie token handling and server side login sessions
- dependencies: ``CurrentUser`` and ``AdminUser`` request dependencies
"""
