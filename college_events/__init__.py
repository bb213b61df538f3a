"""College Events API.

REST backend for a college-events application:
- User registration and login with signed bearer tokens
- Event CRUD with optional image upload, restricted to the event's creator
- Stemmed text search over event title and type
"""

__version__ = "0.1.0"
