"""
Application layer.

Wires the domain services of every bounded context into one
process-wide context object and exposes read-only snapshots of
their state. No framework imports allowed.
"""
