"""
Infrastructure Package
======================

Wiring between the web layer and the domain services.

Modules:
    - container: lazily builds services with their collaborators injected
"""
