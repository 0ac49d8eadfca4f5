# app/main.py

import streamlit as st
from streamlit_cookies_manager import EncryptedCookieManager
from app.core import config
from app.core.session import FEED, REGISTER
from app.core.storage import ClientStore
from app.services.api import check_health
from app.ui.feed import enter_screen, feed_page, logout
from app.ui.login import login_page, register_page


st.set_page_config(page_title="IF-Social", page_icon="❤️")

DARK_MODE_CSS = """
<style>
.stApp { background-color: #15202b; color: #e7e9ea; }
.stApp p, .stApp label, .stApp h1, .stApp h2, .stApp h3 { color: #e7e9ea; }
</style>
"""

cookies = EncryptedCookieManager(prefix=config.COOKIE_PREFIX, password=config.COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()

store = ClientStore(cookies, cookies.save)


def sidebar():
    st.sidebar.markdown("## ❤️ IF-Social")

    if "health_checked" not in st.session_state:
        store.record_health(check_health())
        st.session_state["health_checked"] = True
    health = store.last_health() or {}
    st.sidebar.caption("🟢 Server online" if health.get("ok") else "🔴 Server offline")

    dark = st.sidebar.toggle("🌙 Dark mode", value=store.dark_mode)
    if dark != store.dark_mode:
        store.set_dark_mode(dark)
    if dark:
        st.markdown(DARK_MODE_CSS, unsafe_allow_html=True)


sidebar()

identity = store.load_identity()
screen = enter_screen(identity)

if screen == FEED:
    if st.sidebar.button("🔓 Log out"):
        logout(store)
        st.rerun()
    feed_page(identity)
elif screen == REGISTER:
    register_page(store)
else:
    login_page(store)

store.flush()
