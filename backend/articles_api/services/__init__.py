# Services package init
"""
Articles API — Services Layer
==============================

What:  Business logic between routes (HTTP) and repositories (storage).
Why:   Routes handle HTTP; services handle rules; repositories handle storage.

Service Inventory:
    - validation: Required-field checks for article creation
    - ArticleService: Validate → repository call → not-found mapping
"""
