# sheet_flattener/ui/state.py
import streamlit as st

from sheet_flattener.core.config import get_settings
from sheet_flattener.core.session import Session


def new_session() -> Session:
    settings = get_settings()
    return Session(
        max_upload_bytes=settings.MAX_UPLOAD_BYTES,
        export_sheet_title=settings.EXPORT_SHEET_TITLE,
    )


def init_state():
    for k, factory in {
        "session": new_session,
        "upload_signature": tuple,
        "batch_id": int,
        "load_errors": dict,
        "batch_rejected": bool,
    }.items():
        if k not in st.session_state:
            st.session_state[k] = factory()
