"""Session and message orchestration for the chat client.

Core module of the client. ``ChatController`` turns user intents (log in,
log out, submit a message, upload files, switch session, start a new chat)
into backend calls and applies their outcomes to the conversation state.

Concurrency model:

1. **Single-threaded asyncio** - Every backend call is an ``await`` on the
   SessionServiceClient and nothing else suspends. Intents accepted while one
   operation is suspended interleave with it only at those awaits, so no lock
   is used.

2. **Optimistic user messages** - A submitted message is appended before any
   network activity so the display layer shows it at once.

3. **One create at a time** - While a session is being created, every
   submit or new-chat request waits for that same create. The new session
   starts with all user messages submitted in the meantime.

4. **Generation tags** - Requests cannot be cancelled once issued. Each
   outstanding request remembers the state generation it was issued under; a
   result that arrives after a logout or a session replacement is logged and
   dropped instead of being applied to the wrong conversation.

5. **Failures never escape** - Backend failures are logged. Send and upload
   failures also add a fixed assistant notice to the conversation; session
   acquisition and history loads fail silently. The controller always returns
   to an idle state.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from src.client.config import ClientConfig, get_client_config
from src.client.session_service import SessionServiceClient, SessionServiceError
from src.controller.auth import AuthGate
from src.controller.decision import SessionAction, decide_session_action
from src.controller.state import ConversationState
from src.models import ConversationSnapshot, FileRef, Message

logger = logging.getLogger(__name__)

SEND_FAILED_NOTICE = "Sorry, there was an error processing your request."
UPLOAD_FAILED_NOTICE = "Sorry, there was an error uploading the files."
DEFAULT_UPLOAD_ACK = "Files uploaded successfully."

Listener = Callable[[], None]


class ChatController:
    """Owns the conversation state and the login gate.

    The display layer reads ``snapshot()`` and ``logged_in``, subscribes to
    change notifications, and calls the intent methods. It never mutates
    state directly.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        service: SessionServiceClient | None = None,
    ) -> None:
        """Initialize the controller in the logged-out, empty state.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            service: Optional backend client. Built from the config if omitted.
        """
        self._config = config or get_client_config()
        self._service = service or SessionServiceClient(self._config)
        self._auth = AuthGate(self._config.auth_username, self._config.auth_password)
        self._state = ConversationState()
        self._listeners: list[Listener] = []
        self._acquisition: asyncio.Task[str | None] | None = None
        self._carried: list[Message] = []

    @property
    def logged_in(self) -> bool:
        return self._auth.logged_in

    def snapshot(self) -> ConversationSnapshot:
        """Return a read-only copy of the current conversation state."""
        return self._state.snapshot()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after every state change.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def aclose(self) -> None:
        """Release the backend client."""
        await self._service.aclose()

    # === Auth ===

    async def login(self, username: str, password: str) -> bool:
        """Open the login gate and acquire a session.

        Returns:
            False if the credentials did not match; no request is made then.
        """
        if not self._auth.login(username, password):
            return False
        self._notify()
        await self._reconcile()
        return True

    def logout(self) -> None:
        """Close the login gate and clear the conversation. No request is made."""
        self._auth.logout()
        self._state.reset()
        # A create still in flight belongs to the old login; the next one starts fresh.
        self._acquisition = None
        self._carried = []
        self._notify()

    # === Sessions ===

    async def switch_session(self, session_id: str) -> None:
        """Resume an existing session by loading its history."""
        if not self.logged_in:
            logger.warning(f"Ignoring switch to session {session_id}: not logged in")
            return
        await self._reconcile(target_session_id=session_id)

    async def new_chat(self) -> None:
        """Drop the current session and acquire a fresh one."""
        if not self.logged_in:
            logger.warning("Ignoring new chat request: not logged in")
            return
        if self._acquisition is not None:
            await self._acquire_session()
            return
        self._state.detach()
        self._notify()
        await self._reconcile()

    async def _reconcile(self, target_session_id: str | None = None) -> None:
        action = decide_session_action(
            self.logged_in, self._state.session_id, target_session_id
        )
        logger.debug(f"Session action: {action.value}")
        if action is SessionAction.ACQUIRE:
            await self._acquire_session()
        elif action is SessionAction.RESUME:
            await self._resume_session(target_session_id)

    async def _acquire_session(self, carry: Message | None = None) -> str | None:
        """Create a new session and attach it, sharing one outstanding create.

        Callers arriving while a create is pending wait for that one instead
        of issuing another.

        Args:
            carry: User message submitted while no session was attached. Every
                carried message starts the new session instead of an empty
                history.

        Returns:
            The session id to use, or None if creation failed.
        """
        if self._acquisition is None:
            self._carried = []
            self._acquisition = asyncio.create_task(self._create_and_attach())
        if carry is not None:
            self._carried.append(carry)
        return await asyncio.shield(self._acquisition)

    async def _create_and_attach(self) -> str | None:
        task = asyncio.current_task()
        generation = self._state.generation
        try:
            try:
                session_id = await self._service.create_session()
            except SessionServiceError as e:
                logger.error(f"Error creating new chat session: {e}")
                return None

            if not self.logged_in or self._acquisition is not task:
                logger.warning(f"Discarding new session {session_id}: logged out meanwhile")
                return None
            if self._state.generation != generation:
                logger.warning(
                    f"Discarding new session {session_id}: session changed meanwhile"
                )
                return self._state.session_id

            self._state.start_session(session_id, self._carried)
            logger.info(f"Started chat session {session_id}")
            self._notify()
            return session_id
        finally:
            if self._acquisition is task:
                self._acquisition = None
                self._carried = []

    async def _resume_session(self, session_id: str) -> None:
        generation = self._state.generation
        try:
            messages = await self._service.load_history(session_id)
        except SessionServiceError as e:
            logger.error(f"Error loading chat history for {session_id}: {e}")
            return

        if not self.logged_in or self._state.generation != generation:
            logger.warning(f"Discarding history of {session_id}: state changed meanwhile")
            return

        self._state.restore_session(session_id, messages)
        logger.info(f"Resumed chat session {session_id} ({len(messages)} messages)")
        self._notify()

    # === Messages ===

    async def submit(self, text: str) -> None:
        """Send a user message and append the assistant's reply.

        Empty or whitespace-only input is ignored. Overlapping calls are
        allowed; ``busy`` stays true until the last outstanding send returns.
        """
        if not text.strip():
            return
        if not self.logged_in:
            logger.warning("Ignoring message: not logged in")
            return

        epoch = self._state.epoch
        user_message = Message.user(text)
        self._state.append(user_message)
        self._notify()

        session_id = self._state.session_id
        if session_id is None:
            session_id = await self._acquire_session(carry=user_message)
            if self._state.epoch != epoch:
                logger.warning("Dropping message: logged out while acquiring a session")
                return
            # A session resumed meanwhile replaced the list this message was in.
            if not any(m is user_message for m in self._state.messages):
                self._state.append(user_message)
                self._notify()

        generation = self._state.generation
        send_id = self._state.begin_send()
        self._notify()
        try:
            try:
                content = await self._service.send_message(
                    session_id, list(self._state.messages)
                )
            except SessionServiceError as e:
                logger.error(f"Error sending message: {e}")
                reply = Message.assistant(SEND_FAILED_NOTICE)
            else:
                reply = Message.assistant(content)

            if self._state.generation == generation:
                self._state.append(reply)
            else:
                logger.warning("Discarding reply: session changed while it was pending")
        finally:
            self._state.end_send(send_id)
            self._notify()

    async def upload_files(self, files: Sequence[FileRef]) -> None:
        """Upload files and record them in the conversation.

        Uploads do not touch ``busy`` and may run alongside sends.
        """
        if not files:
            return
        if not self.logged_in:
            logger.warning("Ignoring upload: not logged in")
            return

        epoch = self._state.epoch
        try:
            ack = await self._service.upload_files(files)
        except SessionServiceError as e:
            logger.error(f"Error uploading files: {e}")
            uploaded: list[FileRef] = []
            messages = [Message.assistant(UPLOAD_FAILED_NOTICE)]
        else:
            uploaded = list(files)
            names = ", ".join(f.name for f in files)
            messages = [
                Message.user(f"Uploaded files: {names}"),
                Message.assistant(ack or DEFAULT_UPLOAD_ACK),
            ]
            logger.info(f"Uploaded {len(uploaded)} file(s): {names}")

        if self._state.epoch != epoch:
            logger.warning("Discarding upload result: logged out while it was pending")
            return

        self._state.add_files(uploaded)
        self._state.append(*messages)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
