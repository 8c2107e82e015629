"""
Service layer abstraction.

Each service encapsulates the business logic for a domain and talks to
persistence only through a store object, so API handlers stay unaware
of which backend is in use.
"""
