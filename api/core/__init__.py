"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks used by more than one package (DB pool,
error types, logging). Feature SQL and business logic stay in the feature
package (`todos/`); the client-side mirror lives in `client/`.
"""
