"""
Routers module - API endpoint handlers organized by feature.

- auth: Sign-up, log-in, log-out
- content: Generation, output actions and related topics
"""
