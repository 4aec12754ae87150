# sheet_flattener/ui/app.py
import streamlit as st

from sheet_flattener.core.config import get_settings
from sheet_flattener.core.session import Session, can_export, can_process
from sheet_flattener.engine.codec import CSV_MIME, XLSX_MIME
from sheet_flattener.ui.components import load_batch, render_sheet_selector, results_frame, upload_signature
from sheet_flattener.ui.state import init_state
from sheet_flattener.utils.logging_setup import setup_logging

settings = get_settings()


@st.cache_resource
def _init_logging():
    setup_logging(log_level=settings.LOG_LEVEL, log_dir=settings.LOG_DIR, component="sheet-flattener-ui")
    return True


st.set_page_config(page_title=settings.APP_NAME, layout="wide")
_init_logging()
init_state()
session: Session = st.session_state.session

st.title(settings.APP_NAME)
st.caption("Upload → Select sheets → Process → Download")


# Upload
uploaded = st.file_uploader("Choose .xlsx files", type=["xlsx"], accept_multiple_files=True)
signature = upload_signature(uploaded)
if signature != st.session_state.upload_signature:
    st.session_state.upload_signature = signature
    load_batch(session, uploaded)

for file_name, reason in st.session_state.load_errors.items():
    st.error(f"Could not read {file_name}: {reason}")
if st.session_state.batch_rejected and session.selection.file_names:
    st.caption(f"Upload rejected. Still showing the previous batch: {', '.join(session.selection.file_names)}")


# Sheet selection
if session.selection.file_names:
    st.markdown("**Select sheets to include:**")
    render_sheet_selector(session)

    if st.button("Process Selected Sheets", type="primary", disabled=not can_process(session.selection)):
        with st.spinner("Processing..."):
            session.process()


# Downloads
has_result = can_export(session.rows)
d1, d2, _ = st.columns([1, 1, 4])
with d1:
    st.download_button(
        "Download XLSX",
        data=session.export_workbook() if has_result else b"",
        file_name=settings.WORKBOOK_EXPORT_NAME,
        mime=XLSX_MIME,
        disabled=not has_result,
    )
with d2:
    st.download_button(
        "Download CSV",
        data=session.export_csv() if has_result else "",
        file_name=settings.CSV_EXPORT_NAME,
        mime=CSV_MIME,
        disabled=not has_result,
    )


# Results
if has_result:
    st.dataframe(results_frame(session.rows), use_container_width=True, hide_index=True)
else:
    st.caption("Please upload one or more XLSX files.")
