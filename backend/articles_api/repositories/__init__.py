# Repositories package init
"""
Articles API — Repository Layer
================================

What:  Storage access for articles, behind one abstract interface.
Why:   The service layer must not care whether articles live in PostgreSQL
       or in process memory; the store is chosen once at startup.

Repository Inventory:
    - ArticleRepository (abstract): The capability set every store provides
    - SQLArticleRepository: Async SQLAlchemy implementation (PostgreSQL, SQLite)
    - InMemoryArticleRepository: Lock-guarded ordered map, lost on restart
"""
