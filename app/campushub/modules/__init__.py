"""
Feature modules live under this package.

Keep module boundaries clean: each module owns its models, service and routes,
while reusing platform primitives (auth, RBAC, lifecycle, pagination, audit, DB session).
"""
