"""
API Repositories - Data access abstraction layer

Provides a clean interface for the favorites collection that can be swapped
between local file storage (current) and a database (future).

Pattern: Repository Pattern
"""
