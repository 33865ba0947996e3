"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the application. Parses forms, renders pages,
    maps domain exceptions to HTTP responses. No business logic.

Contains:
    - FastAPI routers (pages, submissions, system)
    - Response models (Pydantic, camelCase JSON)
    - Dependency injection setup (dependencies.py)
    - Middleware configuration (CORS, logging)
    - Jinja2 templates (form, submissions list)

Does NOT contain:
    - Business logic (belongs to Domain layer)
    - Orchestration (belongs to Application layer)
    - Storage or network operations (belongs to Infrastructure layer)
"""
