"""Minimal app guarding a destructive ``delete_user`` event.

Run with ``LIVESEAL_SECRET_KEY`` set, then render a button whose click event
and ``user-id`` value come from ``render_user_row``. Editing either attribute
in the browser makes the request fail with 403.
"""

import html

import uvicorn

from server import create_app, create_dispatcher

USERS = {"41": "Ada Lovelace", "42": "Alan Turing"}

dispatcher = create_dispatcher()


@dispatcher.on("delete_user")
def delete_user(params: dict[str, str], session_id: str) -> dict:
    del session_id
    removed = USERS.pop(params["user-id"], None)
    return {"deleted": removed is not None, "remaining": sorted(USERS)}


def render_user_row(session_id: str, user_id: str) -> str:
    signer = dispatcher.signer
    event = signer.sign_event(session_id, "delete_user")
    value = signer.sign_value(session_id, "user-id", user_id)
    return (
        f"<button data-event=\"{html.escape(event)}\" "
        f"data-value-user-id=\"{html.escape(value)}\">"
        f"Delete {html.escape(USERS[user_id])}</button>"
    )


app = create_app(dispatcher)


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000)
