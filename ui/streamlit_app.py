# Role: Streamlit chat UI.
# - The UI owns the transcript and conversation_id (backend is stateless) and sends them with every turn.
# - Errors are shown inline as assistant messages.

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import requests
import streamlit as st

from backend.models.user_datetime import UserDateTime

BACKEND_URL = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")


# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "messages" not in st.session_state:
        st.session_state["messages"] = []
    if "conversation_id" not in st.session_state:
        st.session_state["conversation_id"] = None
    if "conversation_history" not in st.session_state:
        st.session_state["conversation_history"] = []
    if "busy" not in st.session_state:
        st.session_state["busy"] = False


def reset_session() -> None:
    st.session_state["messages"] = []
    st.session_state["conversation_id"] = None
    st.session_state["conversation_history"] = []


# ----------------------------
# Backend calls
# ----------------------------
def build_payload(
    message: str,
    conversation_id: Optional[str],
    conversation_history: List[Dict[str, Any]],
    user_datetime: Optional[UserDateTime] = None,
) -> Dict[str, Any]:
    return {
        "message": message,
        "conversation_id": conversation_id,
        "conversation_history": conversation_history,
        "user_datetime": (user_datetime or UserDateTime.now()).to_wire(),
    }


def send_to_backend(payload: Dict[str, Any], backend_url: str = BACKEND_URL) -> Dict[str, Any]:
    resp = requests.post(f"{backend_url}/api/chat", json=payload, timeout=60)
    try:
        data = resp.json()
    except ValueError:
        data = {}
    # Key line: only a JSON object is a usable reply; lists and bare values count as empty.
    if not isinstance(data, dict):
        data = {}
    if not resp.ok:
        raise RuntimeError(data.get("error") or f"Server error: {resp.status_code}")
    return data


def apply_turn_result(session: Dict[str, Any], data: Dict[str, Any]) -> str:
    # 1) Keep the first conversation_id we are given
    # 2) Replace the transcript with the backend's bounded copy (dropping malformed entries)
    # 3) Return the text to display
    if data.get("conversation_id") and not session.get("conversation_id"):
        session["conversation_id"] = data["conversation_id"]

    history = data.get("conversation_history")
    if isinstance(history, list):
        session["conversation_history"] = [
            m for m in history if isinstance(m, dict) and isinstance(m.get("content"), str)
        ]

    if data.get("response") is None:
        return "Error: No response received from the server."
    return data["response"] or "No response received"


# ----------------------------
# Chat
# ----------------------------
def render_sidebar() -> None:
    st.sidebar.title("Conversation")
    if st.sidebar.button("New chat", use_container_width=True, disabled=st.session_state["busy"]):
        reset_session()
        st.rerun()

    st.sidebar.divider()
    st.sidebar.caption(f"Messages in context: {len(st.session_state['conversation_history'])}")
    if st.session_state["conversation_id"]:
        st.sidebar.caption(f"Conversation: {st.session_state['conversation_id']}")


def render_chat() -> None:
    for msg in st.session_state["messages"]:
        with st.chat_message(msg["role"]):
            st.markdown(msg["content"])


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="Search Chat", layout="wide")

    st.title("Search Chat")
    st.caption("Ask anything. Answers can use live web search.")

    ensure_session()
    render_sidebar()
    render_chat()

    user_input = st.chat_input("Type your message...", disabled=st.session_state["busy"])
    if not user_input or not user_input.strip():
        return
    user_input = user_input.strip()

    # Echo user message immediately
    st.session_state["messages"].append({"role": "user", "content": user_input})
    with st.chat_message("user"):
        st.markdown(user_input)

    st.session_state["busy"] = True
    try:
        payload = build_payload(
            user_input,
            st.session_state["conversation_id"],
            st.session_state["conversation_history"],
        )
        with st.spinner("Thinking..."):
            data = send_to_backend(payload)
        assistant_text = apply_turn_result(st.session_state, data)
    except (requests.RequestException, RuntimeError) as e:
        assistant_text = f"Error: {e}"
    finally:
        st.session_state["busy"] = False

    st.session_state["messages"].append({"role": "assistant", "content": assistant_text})
    with st.chat_message("assistant"):
        st.markdown(assistant_text)


if __name__ == "__main__":
    main()
