"""Service layer for business logic.

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Contain the business rules (e.g. participant confirmation)
- Parse and validate identifiers before touching the store
- Raise domain exceptions, never HTTPException

Services should NOT:
- Directly execute SQL queries (use repositories)
- Know about HTTP request/response details
"""
