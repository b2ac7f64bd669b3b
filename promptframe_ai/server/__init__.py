"""
PromptFrame-AI Server Package.

This package contains the web server implementation for PromptFrame-AI.
It includes the API definition, authentication, configuration and the
cross-cutting middleware and exception handlers.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    auth: Password hashing, session cookies and auth dependencies.
    core: Settings and server constants.
    services: Request dependencies for sessions, OpenAI clients and the job runner.
"""
