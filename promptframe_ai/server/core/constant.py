"""Server-wide constants."""

PROJECT_NAME = "PromptFrame-AI"
API_PREFIX = "/api"
VERSION = "0.1.0"
