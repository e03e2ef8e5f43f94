"""
Service layer abstraction.

Each service encapsulates the business rules for a domain.  Services
receive their storage explicitly, so API handlers never touch the
storage layer directly.
"""
