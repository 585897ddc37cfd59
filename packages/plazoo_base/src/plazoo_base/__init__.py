"""
Plazoo Base - shared infrastructure

Settings, logging, database sessions and the Redis client.
No domain code lives here.
"""
