"""
Snipnet Backend — Services Layer
==================================

Service Inventory:
    - SnippetStore (abstract): persistence contract
    - SqlSnippetStore: async SQLAlchemy implementation
    - InMemorySnippetStore: process-local implementation
    - SnippetController: validation, ownership and id rules over a store
"""
