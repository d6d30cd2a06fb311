"""
PocketVest: local state layer of a personal-finance app.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - identity: Credential store, sign-up/sign-in, onboarding flow.
    - watchlist: Favorited item identifiers backed by a durable table.
    - news: Paginated remote article feed.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Process-wide context object, snapshot DTOs.
    - infrastructure: Adapters (JSON file, SQL, HTTP) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, logging).
"""
