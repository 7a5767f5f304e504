"""
Snipnet Backend — API Routes Package
======================================

Route Inventory:
    - snippets.py: /api/snippets, /api/snippets/{id}, /api/users/{userid}/snippets
    - health.py:   GET /health

Routes are thin: they read the session, path and body, call
SnippetController, and wrap the result in the {message, data} envelope.
"""
