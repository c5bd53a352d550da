"""In-memory conversation state owned by the chat controller."""

import itertools
from collections.abc import Iterable

from src.models import ConversationSnapshot, FileRef, Message


class ConversationState:
    """Current session id, messages, attached files and outstanding sends.

    Only the controller mutates this object. ``generation`` is bumped
    whenever the current session is replaced or the state is reset, and
    ``epoch`` only on reset; the controller tags outstanding requests with
    them to recognize results that arrive too late.
    """

    def __init__(self) -> None:
        self.session_id: str | None = None
        self.messages: list[Message] = []
        self.files: list[FileRef] = []
        self.generation = 0
        self.epoch = 0
        self._pending_sends: set[int] = set()
        self._send_ids = itertools.count(1)

    @property
    def busy(self) -> bool:
        return bool(self._pending_sends)

    def append(self, *messages: Message) -> None:
        self.messages.extend(messages)

    def add_files(self, files: Iterable[FileRef]) -> None:
        self.files.extend(files)

    def start_session(self, session_id: str, messages: Iterable[Message] = ()) -> None:
        """Attach a freshly created session; clears messages and files."""
        self.session_id = session_id
        self.messages = list(messages)
        self.files = []
        self.generation += 1

    def restore_session(self, session_id: str, messages: Iterable[Message]) -> None:
        """Attach an existing session, replacing the whole message list."""
        self.session_id = session_id
        self.messages = list(messages)
        self.generation += 1

    def detach(self) -> None:
        """Drop the current session id, keeping messages until a new one arrives."""
        self.session_id = None
        self.generation += 1

    def reset(self) -> None:
        """Return to the empty logged-out form."""
        self.session_id = None
        self.messages = []
        self.files = []
        self._pending_sends.clear()
        self.generation += 1
        self.epoch += 1

    def begin_send(self) -> int:
        send_id = next(self._send_ids)
        self._pending_sends.add(send_id)
        return send_id

    def end_send(self, send_id: int) -> None:
        # Already gone if a reset happened while the send was outstanding.
        self._pending_sends.discard(send_id)

    def snapshot(self) -> ConversationSnapshot:
        return ConversationSnapshot(
            session_id=self.session_id,
            messages=tuple(self.messages),
            files=tuple(self.files),
            busy=self.busy,
        )
