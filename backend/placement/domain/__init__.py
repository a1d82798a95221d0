"""
Domain layer: pure business rules with no framework or database dependencies.
"""
