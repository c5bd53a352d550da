"""NiceGUI interface - thin presentation layer over the chat controller.

Responsibilities:
    - Login form while the gate is closed
    - Message list, busy indicator and send box
    - File attachments and session switching
    - Re-rendering on controller change notifications

Contains no business logic. Every user action is forwarded to the
controller, which owns all state.
"""
