"""NiceGUI chat interface driven by the chat controller."""

from nicegui import Client, events, ui

from src.controller import ChatController
from src.models import ConversationSnapshot, FileRef, Message, Role

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }
</style>
"""


def render_message(msg: Message) -> None:
    is_user = msg.role is Role.USER
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-assistant"

    with ui.row().classes(f"w-full {align}"):
        with ui.element("div").classes(f"max-w-[70%] px-4 py-3 {bubble}"):
            if is_user:
                ui.label(msg.content).classes("text-sm whitespace-pre-wrap")
            else:
                ui.markdown(msg.content).classes("text-sm")


def render_conversation(snapshot: ConversationSnapshot) -> None:
    if snapshot.files:
        with ui.row().classes("w-full gap-2"):
            for file in snapshot.files:
                ui.chip(file.name, icon="attach_file").props("dense outline")

    if not snapshot.messages:
        with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
            ui.icon("forum").classes("text-5xl text-gray-300")
            ui.label("Start a conversation").classes("text-lg text-gray-400")
    for msg in snapshot.messages:
        render_message(msg)

    if snapshot.busy:
        with ui.row().classes("w-full justify-start items-center gap-2"):
            ui.spinner("dots", size="lg").classes("text-indigo-400")
            ui.label("Thinking...").classes("text-sm text-gray-500 italic")


async def to_file_refs(uploads: list) -> list[FileRef]:
    """Read every uploaded file of one pick into FileRefs, keeping their order."""
    return [
        FileRef(
            name=upload.name,
            content=await upload.read(),
            content_type=upload.content_type or "application/octet-stream",
        )
        for upload in uploads
    ]


def bind_to_client(client: Client, controller: ChatController) -> None:
    # on_disconnect also fires on reconnects; only a deleted client is gone for good.
    client.on_delete(controller.aclose)


@ui.page("/")
def chat_page() -> None:
    """Main chat page. Each browser client gets its own controller."""
    ui.add_head_html(CUSTOM_CSS)
    controller = ChatController()
    bind_to_client(ui.context.client, controller)

    shown_logged_in = controller.logged_in
    send_btn: ui.button | None = None

    @ui.refreshable
    def conversation() -> None:
        render_conversation(controller.snapshot())

    @ui.refreshable
    def session_label() -> None:
        session_id = controller.snapshot().session_id
        text = session_id[:8].upper() if session_id else "NO SESSION"
        ui.label(text).classes("text-xs text-white/80 font-mono")

    def on_change() -> None:
        nonlocal shown_logged_in
        if controller.logged_in != shown_logged_in:
            shown_logged_in = controller.logged_in
            body.refresh()
            return
        conversation.refresh()
        session_label.refresh()
        if send_btn is not None:
            # Overlapping sends are allowed by the controller; the page blocks them.
            send_btn.set_enabled(not controller.snapshot().busy)

    controller.subscribe(on_change)

    def render_login() -> None:
        async def submit_login() -> None:
            if not await controller.login(username.value, password.value):
                ui.notify("Invalid username or password", type="negative")

        with ui.column().classes("w-full max-w-sm mx-auto mt-24 p-8 gap-4 app-container"):
            ui.label("Sign in").classes("text-xl font-semibold")
            username = ui.input("Username").classes("w-full")
            password = ui.input(
                "Password", password=True, password_toggle_button=True
            ).classes("w-full")
            password.on("keydown.enter", submit_login)
            ui.button("Log in", on_click=submit_login).classes("w-full")

    def render_chat() -> None:
        nonlocal send_btn

        async def send_message() -> None:
            text = input_field.value
            if not text.strip() or controller.snapshot().busy:
                return
            input_field.value = ""
            await controller.submit(text)

        async def open_session() -> None:
            session_id = session_input.value.strip()
            if session_id:
                await controller.switch_session(session_id)

        async def handle_upload(e: events.MultiUploadEventArguments) -> None:
            await controller.upload_files(await to_file_refs(e.files))

        with ui.column().classes("w-full max-w-4xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ):
            with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
                with ui.row().classes("items-center gap-3"):
                    ui.icon("smart_toy").classes("text-white text-3xl")
                    ui.label("Chat").classes("text-lg font-semibold text-white")
                with ui.row().classes("items-center gap-3"):
                    session_label()
                    ui.button(icon="add", on_click=controller.new_chat).props(
                        "flat round color=white"
                    )
                    ui.button(icon="logout", on_click=controller.logout).props(
                        "flat round color=white"
                    )

            with ui.row().classes("w-full px-5 pt-3 gap-3 items-center"):
                session_input = ui.input(placeholder="Session id").props("dense")
                ui.button("Open", on_click=open_session).props("flat dense")
                ui.upload(
                    label="Attach files", multiple=True, auto_upload=True,
                    on_multi_upload=handle_upload,
                ).props("flat dense")

            with (
                ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
                ui.column().classes("w-full p-5 gap-4"),
            ):
                conversation()

            with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow borderless dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props(
                    "round unelevated"
                )

    @ui.refreshable
    def body() -> None:
        nonlocal send_btn
        send_btn = None
        if controller.logged_in:
            render_chat()
        else:
            render_login()

    body()
