"""
Streamlit entry point for the student directory.

    streamlit run frontend/streamlit_app.py

Reads settings (env / .env), configures logging once per process and
renders the page. The backend is expected at STUDENT_DIRECTORY_API_URL
(default http://localhost:8080).
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path when run through `streamlit run`
REPO_ROOT = str(Path(__file__).parent.parent)
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

import streamlit as st  # noqa: E402

from frontend import ui  # noqa: E402
from frontend.config import get_settings, setup_logging  # noqa: E402

settings = get_settings()
setup_logging(settings)

st.set_page_config(page_title=ui.TITLE, layout="centered")
ui.main(settings)
