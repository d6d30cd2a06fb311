"""
Interface layer.

FastAPI routers and Pydantic schemas through which a UI client reads
the observable state and triggers operations. No business logic.
"""
