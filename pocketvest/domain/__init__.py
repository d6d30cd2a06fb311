"""
Domain layer.

Pure business logic for every bounded context. No framework imports
and no IO; adapters are injected through the ports of each context.
"""
