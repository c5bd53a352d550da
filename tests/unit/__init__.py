"""Unit tests for individual components in isolation.

Coverage:
    - controller/: Orchestration, state, session decision, login gate
    - client/: Request building, response parsing, error mapping
    - config: Pydantic validation and environment loading

The backend is scripted through httpx.MockTransport. Leverages
pytest-check for multiple assertions per test.
"""
