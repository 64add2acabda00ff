"""
Execution handlers, one module per Basecamp resource family.

Modules here are imported by `core.dispatch.discover_operation_modules`;
each registers its handlers with `@handler(Resource.X, Operation.Y)`.
"""
