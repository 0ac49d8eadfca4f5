# app/ui/login.py

import streamlit as st
from app.core.passwords import check_password
from app.core.session import FEED, LOGIN, REGISTER, Identity
from app.services.api import login_user, register_user


def _enter_feed(store, result, message):
    identity = Identity.from_payload(result)
    if identity is None:
        st.error(f"❌ {result.get('error', 'Something went wrong.')}")
        return
    store.save_identity(identity)
    store.flush()
    st.session_state["screen"] = FEED
    st.toast(message)
    st.rerun()


def login_page(store):
    st.title("🔐 Log in")

    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")

    if submitted:
        username = username.strip()
        if not username or not password:
            st.toast("Fill all fields!")
        else:
            with st.spinner("Logging in..."):
                result = login_user(username, password)
            _enter_feed(store, result, "✅ Welcome back!")

    if st.button("Create an account"):
        st.session_state["screen"] = REGISTER
        st.rerun()


def register_page(store):
    st.subheader("📝 Create an account")

    with st.form("register_form"):
        username = st.text_input("New username")
        password = st.text_input("New password", type="password")
        submitted = st.form_submit_button("Sign up")

    if submitted:
        username = username.strip()
        check = check_password(password)
        if not username or not password:
            st.toast("Fill all fields!")
        elif not check.valid:
            st.error("The password needs:\n" + "\n".join(f"- {p}" for p in check.problems()))
        else:
            with st.spinner("Creating account..."):
                result = register_user(username, password)
            _enter_feed(store, result, "🎉 Account created! Logging in...")

    if st.button("← Back to log in"):
        st.session_state["screen"] = LOGIN
        st.rerun()
