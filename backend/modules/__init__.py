"""
Feature modules for the garage console backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's public API
- models.py: Pydantic models for data transfer
- repository.py: Supabase queries
- service.py: Business logic implementation
- exceptions.py: Module-specific exceptions

The auth module owns the session core (reconciler, facade, console
session registry); the employees module manages the accounts that sign
in with shadow sessions. Modules communicate through interfaces, not
concrete implementations.
"""
