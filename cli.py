# Role: Local developer CLI to chat through FlowController without the web UI.
# The CLI plays the client: it owns the transcript and conversation_id and passes them into every turn.

from __future__ import annotations

import logging

import backend.config
backend.config.load_env()

from backend.core.errors import ChatError
from backend.core.flow_controller import FlowController
from backend.models.user_datetime import UserDateTime


def main() -> None:
    # 1) Create FlowController
    # 2) Keep transcript + conversation_id across turns
    # 3) Route user input -> FlowController -> print assistant output
    logging.basicConfig(level=logging.DEBUG if backend.config.DEBUG else logging.WARNING)

    print("Search Chat CLI")
    print("Commands: /new (new conversation), /history (show transcript), /exit")
    print("Run the HTTP API with: uvicorn backend.main:app --reload")
    print("-" * 50)

    flow = FlowController()
    conversation_id = None
    transcript = []

    while True:
        try:
            user_message = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_message:
            continue

        cmd = user_message.lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Bye!")
            return

        if cmd in {"/new", "new"}:
            conversation_id = None
            transcript = []
            print("Started a new conversation.")
            continue

        if cmd in {"/history", "history"}:
            print(f"conversation_id: {conversation_id}  ({len(transcript)} messages)")
            for m in transcript:
                print(f"  [{m.role}] {m.content}")
            continue

        try:
            result = flow.handle_turn(
                user_message,
                conversation_history=transcript,
                conversation_id=conversation_id,
                user_datetime=UserDateTime.now(),
            )
        except ChatError as e:
            # Key line: show errors inline like an assistant message; transcript is left untouched.
            print(f"\nAssistant: Sorry, an error occurred: {e}")
            continue

        conversation_id = result.conversation_id
        transcript = result.conversation_history
        print(f"\nAssistant: {result.response}")


if __name__ == "__main__":
    main()
