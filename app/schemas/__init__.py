"""
Schemas module - Request/Response schemas for API endpoints.

- Request schemas: what the API accepts
- Response schemas: what the API returns
"""
