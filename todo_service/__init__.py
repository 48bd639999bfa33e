"""
Todo service application package.

Holds the data-access bootstrap used by the container deployed on ECS:
configuration, logging, the Todo entity, and versioned schema migrations.
"""
