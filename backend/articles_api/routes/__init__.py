# Routes package init
"""
Articles API — API Routes Package
==================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - home.py:     GET  /                     (plain-text welcome)
    - articles.py: GET  /articles             (list all articles)
                   GET  /articles/{id}        (single article)
                   POST /articles             (create, with validation)
                   PUT  /articles/{id}        (update)
                   DELETE /articles/{id}      (delete)
    - health.py:   GET  /health               (service health check)

Design Principle:
    Routes are THIN: they extract path/body data, call ArticleService and
    pick the success status code. Error status codes come from the global
    exception handlers in main.py.
"""
