# sheet_flattener/ui/components.py
import logging
from typing import List, Sequence

import pandas as pd
import streamlit as st

from sheet_flattener.core.config import get_settings
from sheet_flattener.core.errors import WorkbookLoadError
from sheet_flattener.core.models import FlattenedRow, UploadedFile
from sheet_flattener.core.session import Session
from sheet_flattener.engine.export import COLUMNS, rows_to_records

logger = logging.getLogger(__name__)

SHEET_GRID_COLUMNS = 8


def results_frame(rows: Sequence[FlattenedRow]) -> pd.DataFrame:
    """Results table; every cell shown as text so mixed columns render."""
    records = [
        {column: "" if value is None else str(value) for column, value in record.items()}
        for record in rows_to_records(rows)
    ]
    return pd.DataFrame(records, columns=COLUMNS)


def upload_signature(uploaded_files) -> tuple:
    """Identity of the uploader's current file set."""
    return tuple((f.file_id, f.name, f.size) for f in uploaded_files or [])


def load_batch(session: Session, uploaded_files) -> None:
    """
    Replace the session's batch with the uploader's current files.

    A rejected batch leaves the previous one active and sets batch_rejected.
    """
    batch: List[UploadedFile] = [UploadedFile(name=f.name, content=f.getvalue()) for f in uploaded_files or []]
    try:
        report = session.load_files(batch, skip_invalid=get_settings().SKIP_INVALID_FILES)
        st.session_state.load_errors = report.rejected
        st.session_state.batch_rejected = False
    except WorkbookLoadError as e:
        logger.warning(f"Upload batch rejected: {e}")
        st.session_state.load_errors = e.failures
        st.session_state.batch_rejected = True
    st.session_state.batch_id += 1


def render_sheet_selector(session: Session) -> None:
    """One bordered box per file with a checkbox grid of its sheets."""
    batch_id = st.session_state.batch_id
    for file_name in session.selection.file_names:
        with st.container(border=True):
            st.markdown(f"**{file_name}**")
            sheet_names = session.selection.sheet_names(file_name)
            if not sheet_names:
                st.caption("No sheets found.")
                continue
            cols = st.columns(SHEET_GRID_COLUMNS)
            for i, sheet_name in enumerate(sheet_names):
                with cols[i % SHEET_GRID_COLUMNS]:
                    st.checkbox(
                        sheet_name,
                        value=session.selection.is_included(file_name, sheet_name),
                        # batch id keeps widget state from leaking into a new batch
                        key=f"include::{batch_id}::{file_name}::{sheet_name}",
                        on_change=session.toggle,
                        args=(file_name, sheet_name),
                    )
