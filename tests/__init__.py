"""Test package for the chat client.

Unit tests for isolated logic and integration tests for whole
conversations.

Structure:
    - unit/: Controller, state, decision, auth, config and client tests
    - integration/: Development backend and end-to-end controller flows

Leverages pytest with pytest-check for soft assertions.
"""
