"""
Service layer abstraction.

Each service encapsulates business logic for a domain so that API
handlers stay free of storage and retry details.
"""
