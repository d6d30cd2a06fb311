"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: local files, SQL databases
and remote HTTP APIs.
"""
