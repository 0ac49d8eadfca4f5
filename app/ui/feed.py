# app/ui/feed.py

from datetime import datetime
import streamlit as st
from app.core import config
from app.core.poller import FeedPoller, FeedSnapshot
from app.core.session import FEED, LOGIN, required_screen
from app.services.api import create_post, list_feed, toggle_hype


# stop polling when no rerun has looked at the feed for this long
IDLE_TIMEOUT = config.POLL_INTERVAL * 10

# the page only reads the snapshot, so it can redraw more often than the poller fetches
RENDER_INTERVAL = config.POLL_INTERVAL / 4


# -------------------------------
# Feed lifecycle
# -------------------------------

def start_feed_polling(identity):
    """
    Returns the running poller and snapshot for this identity,
    creating them when the feed is entered.
    """
    if st.session_state.get("feed_owner") != identity.id:
        stop_feed_polling()

    poller = st.session_state.get("feed_poller")
    snapshot = st.session_state.get("feed_snapshot")
    if poller is None:
        snapshot = FeedSnapshot()
        poller = FeedPoller(
            fetch=lambda: list_feed(identity.id),
            on_result=snapshot.update,
            keep_running=lambda: snapshot.viewed_within(IDLE_TIMEOUT),
        )
        st.session_state["feed_poller"] = poller
        st.session_state["feed_snapshot"] = snapshot
        st.session_state["feed_owner"] = identity.id

    snapshot.mark_viewed()
    poller.start()
    return poller, snapshot


def stop_feed_polling():
    poller = st.session_state.pop("feed_poller", None)
    if poller is not None:
        poller.stop()
    st.session_state.pop("feed_snapshot", None)
    st.session_state.pop("feed_owner", None)


def enter_screen(identity):
    """
    Applies the screen guard for this page run and returns the screen to show.
    Leaving the feed stops its poller.
    """
    current = st.session_state.get("screen", LOGIN)
    screen = required_screen(identity, current)
    if screen != current:
        if current == FEED:
            stop_feed_polling()
        st.session_state["screen"] = screen
    return screen


def logout(store):
    stop_feed_polling()
    store.clear_identity()
    store.flush()
    st.session_state["screen"] = LOGIN


# -------------------------------
# Actions
# -------------------------------

def _submit_post(identity, poller):
    content = st.session_state.get("new_post", "").strip()
    if not content:
        return
    result = create_post(identity.id, content)
    if result.get("error"):
        st.toast(f"⚠️ {result['error']}")
        return
    st.session_state["new_post"] = ""
    poller.refresh_now()
    st.toast("Post published!")


def _hype(identity, post_id, poller):
    result = toggle_hype(identity.id, post_id)
    if result.get("error"):
        st.toast(f"⚠️ {result['error']}")
        return
    poller.refresh_now()


# -------------------------------
# Rendering
# -------------------------------

def format_timestamp(ms):
    return datetime.fromtimestamp(ms / 1000).strftime("%d/%m/%Y %H:%M:%S")


@st.fragment(run_every=RENDER_INTERVAL)
def render_feed(identity, poller, snapshot):
    snapshot.mark_viewed()

    error = snapshot.take_error()
    if error:
        st.toast(f"⚠️ {error}")

    if not snapshot.loaded:
        st.info("Loading posts...")
        return

    posts = snapshot.posts()
    if not posts:
        st.info("No posts yet. Say something!")
        return

    for post in posts:
        with st.container(border=True):
            st.markdown(f"**@{post['username']}** · {format_timestamp(post['timestamp'])}")
            st.text(post["content"])
            hyped = post["user_hyped"]
            st.button(
                f"{'❤️' if hyped else '🤍'} {post['hype_count']}",
                key=f"hype_{post['id']}",
                type="primary" if hyped else "secondary",
                on_click=_hype,
                args=(identity, post["id"], poller),
            )


def feed_page(identity):
    st.title(f"Hi, @{identity.username}!")

    poller, snapshot = start_feed_polling(identity)

    with st.form("post_form"):
        st.text_area("What's happening?", key="new_post")
        st.form_submit_button("Post", on_click=_submit_post, args=(identity, poller))

    render_feed(identity, poller, snapshot)
