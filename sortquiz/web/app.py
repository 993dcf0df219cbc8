import time

import streamlit as st

from sortquiz.config import MAX_SIZE, MIN_SIZE, QuizSettings
from sortquiz.default_styles import DEFAULT_STYLES, MESSAGE_COLORS
from sortquiz.dispatcher import QuizSession
from sortquiz.errors import InvalidAction
from sortquiz.sort.base import COMPARE, PLACE

ALGORITHMS = {
    "Bubble Sort": "bubble_sort",
    "Insertion Sort": "insertion_sort",
    "Selection Sort": "selection_sort",
}


def card_html(value, state):
    style = DEFAULT_STYLES["elementStyles"].get(state, DEFAULT_STYLES["elementStyles"]["idle"])
    return (
        f"<div style='display:inline-block; min-width:2.6em; padding:0.6em 0.4em; margin:0.2em;"
        f" text-align:center; font-weight:bold; border-radius:8px;"
        f" background:{style['fill']}; border:{style.get('strokeWidth', 1.5)}px solid {style['stroke']};'>"
        f"{value}</div>"
    )


def show_message(text, tone="normal"):
    color = MESSAGE_COLORS.get(tone, MESSAGE_COLORS["normal"])
    st.markdown(
        f"<div style='text-align:center; font-size:1.1em; font-weight:bold; color:{color};"
        f" min-height:2.5em; padding:0.5em;'>{text}</div>",
        unsafe_allow_html=True,
    )


def submit(session, action):
    """Relay one learner action and remember the message to show after the rerun."""
    try:
        outcome = session.submit(action)
        st.session_state.message = (outcome.message, "success")
    except InvalidAction as e:
        st.session_state.message = (e.message, "error")
    st.rerun()


def render_board(prompt):
    cards = "".join(card_html(v, s) for v, s in zip(prompt.values, prompt.states))
    st.markdown(f"<div style='text-align:center;'>{cards}</div>", unsafe_allow_html=True)


def render_controls(session, prompt):
    if prompt.is_complete:
        return
    if prompt.phase == COMPARE:
        col1, col2 = st.columns(2)
        with col1:
            if st.button("🔄 Swap", use_container_width=True):
                submit(session, "swap")
        with col2:
            if st.button("➡️ No swap", use_container_width=True):
                submit(session, "skip")
        return

    cols = st.columns(len(prompt.eligible))
    for col, target in zip(cols, prompt.eligible):
        if prompt.phase == PLACE:
            label = (f"⬇ before {prompt.values[target]}" if target in prompt.settled
                     else "⬇ at the end")
        else:
            label = f"{prompt.values[target]} (#{target})"
        with col:
            if st.button(label, key=f"target-{prompt.phase}-{target}", use_container_width=True):
                submit(session, target)


def menu_view():
    st.title("Sorting Quiz")
    st.caption("Predict every step of a sorting algorithm before it happens.")
    algorithm = st.selectbox("Algorithm", list(ALGORITHMS))
    size = st.number_input("Array size", min_value=MIN_SIZE, max_value=MAX_SIZE, value=8, step=1)
    order = st.radio("Order", ["asc", "desc"], horizontal=True,
                     format_func=lambda o: "Ascending" if o == "asc" else "Descending")
    convergence = st.radio("Sorted region grows from", ["default", "right", "left"], horizontal=True,
                           format_func=lambda c: "Algorithm default" if c == "default" else c.title())
    if convergence == "default":
        convergence = None

    if st.button("Start", type="primary"):
        settings = QuizSettings.from_mapping({"size": size, "order": order, "convergence": convergence})
        session = QuizSession(settings, pacer=time.sleep)
        session.start(ALGORITHMS[algorithm])
        st.session_state.session = session
        st.session_state.message = None
        st.session_state.view = "game"
        st.rerun()


def game_view():
    session = st.session_state.session
    prompt = session.prompt
    st.title(session.algorithm.title)
    st.caption(f"Steps: {session.steps} · Mistakes: {session.mistakes}")

    render_board(prompt)
    message = st.session_state.get("message")
    if prompt.is_complete:
        show_message(prompt.message, "success")
    elif message:
        show_message(message[0], message[1])
        show_message(prompt.message)
    else:
        show_message(prompt.message)
    render_controls(session, prompt)

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        if st.button("🔁 Restart"):
            session.restart()
            st.session_state.message = None
            st.rerun()
    with col2:
        confirm = st.checkbox("Discard progress and return to the menu")
        if st.button("🏠 Back to menu", disabled=not confirm):
            session.end()
            st.session_state.view = "menu"
            st.rerun()


st.set_page_config(page_title="Sorting Quiz", page_icon="🃏")

if "view" not in st.session_state:
    st.session_state.view = "menu"

if st.session_state.view == "game" and st.session_state.get("session") is not None:
    game_view()
else:
    menu_view()
