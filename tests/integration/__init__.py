"""Integration tests for components working together as a system.

No mocks for core functionality - the controller talks to the FastAPI
development backend through httpx ASGITransport.

Coverage:
    - Backend endpoints with real HTTP requests
    - Login, chat, upload, session switching and logout flows
"""
