"""PromptFrame-AI.

A REST backend for batch generation, curation and iterative refinement of
AI-generated marketing images and concept lists.

High-level architecture
-----------------------

- ``promptframe_ai.core``:

  - Logging and Logfire monitoring setup.
  - The relational data layer: SQLModel entities, async repositories and
    seed data for styles, sessions, jobs, images, prompts and concept lists.
  - Pydantic I/O models that define the REST contract.

- ``promptframe_ai.studio``:

  - Image model capabilities and request building.
  - Prompt builders, AI response parsing and image byte handling.
  - Thin clients over the OpenAI image API and Pydantic AI chat agents.
  - The background job runner and conversational concept refinement.

- ``promptframe_ai.server``:

  - The FastAPI application, cookie session auth and the ``/api`` routers.

Typical workflow
----------------

1. Register or log in (``/api/register``, ``/api/login``).
2. Pick or extract a style (``/api/styles``, ``/api/extract-style``).
3. Start a job with ``/api/generate`` and poll ``/api/jobs/{id}``.
4. Refine single images with ``/api/regenerate``.
"""

__version__ = "0.1.0"
