"""
Streamlit page: department selector + students table.

One Controller lives in st.session_state for the whole browser session.
Streamlit reruns this page top to bottom on every interaction, so a
selection change is detected by comparing the selectbox value with the
controller's selected_dept.
"""

import asyncio
import logging

import streamlit as st

from frontend.config import Settings
from frontend.fetcher import DataFetcher
from frontend.render import LOADING_MESSAGE, Body, RenderPlan, decide
from frontend.state import Controller, log_transitions

log = logging.getLogger("frontend")

TITLE          = "Liste des Étudiants"
SUBTITLE       = "Gestion des étudiants par département"
SELECTOR_LABEL = "Sélectionner un département :"
FOOTER         = "Application déployée via CI/CD avec GitHub Actions"


def _get_controller(settings: Settings) -> Controller:
    controller = st.session_state.get("controller")
    if controller is None:
        log.info("New session, backend at %s", settings.api_base_url)
        fetcher = DataFetcher(settings.api_base_url, timeout=settings.request_timeout)
        controller = Controller(fetcher)
        controller.subscribe(log_transitions)
        asyncio.run(controller.initialize())
        st.session_state["controller"] = controller
    return controller


def _render_body(plan: RenderPlan) -> None:
    if plan.body is Body.ERROR:
        st.error(plan.message)
    elif plan.body is Body.LOADING:
        st.info(plan.message)
    elif plan.body is Body.TABLE:
        st.subheader(plan.heading)
        st.dataframe(plan.rows, hide_index=True)
        st.caption(plan.footer)
    elif plan.body is Body.EMPTY:
        st.info(plan.message)


def main(settings: Settings) -> None:
    st.title(TITLE)
    st.markdown(SUBTITLE)

    controller = _get_controller(settings)
    plan = decide(controller.state)
    labels = dict(plan.options)

    selected = st.selectbox(
        SELECTOR_LABEL,
        [value for value, _ in plan.options],
        format_func=lambda value: labels.get(value, value),
        key="selected_dept",
    )

    if selected != controller.state.selected_dept:
        with st.spinner(LOADING_MESSAGE):
            asyncio.run(controller.on_dept_change(selected))
        plan = decide(controller.state)

    _render_body(plan)

    st.divider()
    st.caption(FOOTER)
