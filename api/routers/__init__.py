"""
API Routers - HTTP endpoint handlers

Each router handles a specific domain of functionality:
- movies: Movie search and favorites management
- health: Health checks and system info
"""
