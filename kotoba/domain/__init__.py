"""
Domain layer.

The domain layer contains the core business logic of the application.
It has no dependencies on external frameworks or infrastructure.

This layer contains:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects defined by attributes
- Transition rules: Pure functions deriving status from progress counters
"""
