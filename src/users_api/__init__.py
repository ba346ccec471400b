"""Users API.

In-memory user registry exposed over HTTP: create, read, update, delete and
CSV export of user records, with request validation and default-role
assignment between the HTTP boundary and the store.
"""

__version__ = "0.1.0"
