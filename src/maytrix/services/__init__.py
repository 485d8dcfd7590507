"""Service layer — host-facing operations returning ServiceResult.

Services may import from the value, domain and config layers.
They must never import from commands or output.
"""
