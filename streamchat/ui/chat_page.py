"""NiceGUI chat interface with streaming replies."""

from nicegui import ui

from streamchat.chat.config import get_client_config
from streamchat.chat.connection import PageConnection
from streamchat.chat.controller import ChatController
from streamchat.models.events import ErrorEvent
from streamchat.models.schemas import Message, Role

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .sidebar { background: #fafafa; border-right: 1px solid #e5e7eb; }

    .message-user {
        background: #111827;
        color: white;
        border-radius: 18px 18px 4px 18px;
        white-space: pre-wrap;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .message-error {
        background: #fef2f2;
        color: #991b1b;
        border: 1px solid #fecaca;
        border-radius: 18px 18px 18px 4px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #6b7280;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }
</style>
"""


def render_message(msg: Message) -> None:
    is_user = msg.role == Role.USER
    align = "justify-end" if is_user else "justify-start"
    if is_user:
        bubble = "message-user"
    else:
        bubble = "message-error" if msg.is_error else "message-assistant"

    with ui.row().classes(f"w-full {align}"):
        with ui.column().classes("max-w-[70%] gap-1"):
            with ui.element("div").classes(f"px-4 py-2 {bubble}"):
                if is_user:
                    ui.label(msg.content).classes("text-sm")
                else:
                    ui.markdown(msg.content).classes("text-sm")
            ui.label(msg.created_at.astimezone().strftime("%I:%M %p")).classes(
                f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
            )


def render_typing_indicator() -> None:
    with ui.row().classes("w-full justify-start"):
        with ui.element("div").classes("message-assistant px-4 py-3"):
            with ui.row().classes("gap-1"):
                for _ in range(3):
                    ui.element("div").classes("typing-dot")


def _view_state(controller: ChatController) -> tuple:
    acc = controller.accumulator
    conversations = tuple((c.id, c.title) for c in controller.conversations)
    return (
        acc.conversation_id,
        len(acc.messages),
        acc.phase,
        bool(acc.streaming_content),
        conversations,
    )


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    connection = PageConnection(get_client_config())
    controller = connection.controller
    acc = controller.accumulator
    rendered: dict = {"state": None, "streaming": None}

    input_field: ui.textarea
    send_btn: ui.button
    scroll: ui.scroll_area

    @ui.refreshable
    def conversation_list() -> None:
        if not controller.conversations:
            ui.label("No conversations yet").classes("text-sm text-gray-400 p-2")
        for conv in controller.conversations:
            active = "bg-gray-200" if conv.id == controller.conversation_id else ""
            ui.button(
                conv.title or "New chat",
                on_click=lambda c=conv: open_conversation(c.id),
            ).props("flat no-caps align=left").classes(f"w-full truncate text-gray-700 {active}")

    @ui.refreshable
    def message_list() -> None:
        rendered["streaming"] = None
        if not acc.messages and not acc.is_busy:
            with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                ui.icon("forum").classes("text-5xl text-gray-300")
                ui.label("Start a conversation").classes("text-lg text-gray-400")
            return
        for msg in acc.messages:
            render_message(msg)
        if acc.streaming_content:
            with ui.row().classes("w-full justify-start"):
                with ui.element("div").classes("message-assistant px-4 py-2 max-w-[70%]"):
                    rendered["streaming"] = ui.markdown(acc.streaming_content).classes("text-sm")
        elif acc.is_busy:
            render_typing_indicator()

    def on_change() -> None:
        state = _view_state(controller)
        if state != rendered["state"]:
            rendered["state"] = state
            message_list.refresh()
            conversation_list.refresh()
            send_btn.set_enabled(not controller.is_streaming)
        elif rendered["streaming"] is not None:
            rendered["streaming"].set_content(acc.streaming_content)
        scroll.scroll_to(percent=1.0)

    async def send_message() -> None:
        text = input_field.value.strip()
        if not text or controller.is_streaming:
            return
        input_field.value = ""
        connection.ensure_open()
        terminal = await controller.send(text)
        if isinstance(terminal, ErrorEvent):
            ui.notify(terminal.error, type="negative")

    async def refresh_conversations() -> None:
        connection.ensure_open()
        await controller.refresh_conversations()

    async def open_conversation(conversation_id: int) -> None:
        connection.ensure_open()
        await controller.open_conversation(conversation_id)

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.row().classes("w-full max-w-5xl mx-auto app-container no-wrap gap-0").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Sidebar
        with ui.column().classes("sidebar w-64 h-full p-3 gap-2"):
            ui.button("New chat", icon="add", on_click=controller.new_chat).classes("w-full")
            with ui.scroll_area().classes("flex-grow w-full"):
                conversation_list()

        # Chat
        with ui.column().classes("flex-grow h-full gap-0"):
            with ui.row().classes("w-full px-5 py-4 border-b items-center"):
                ui.icon("smart_toy").classes("text-2xl text-gray-700")
                ui.label("streamchat").classes("text-lg font-semibold")

            with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll:
                with ui.column().classes("w-full p-5 gap-4"):
                    message_list()

            with ui.row().classes("w-full p-4 gap-3 items-end border-t"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow outlined dense rows=1")
                    .classes("flex-grow")
                    .on("keydown.enter.prevent", send_message)
                )
                send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    controller.on_change = on_change
    ui.context.client.on_connect(connection.ensure_open)
    ui.context.client.on_disconnect(connection.suspend)
    ui.timer(0.1, refresh_conversations, once=True)


def main() -> None:
    ui.run(title="streamchat", port=8081, reload=False)


if __name__ == "__main__":
    main()
