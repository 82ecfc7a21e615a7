"""
folio_web_app.py

This Streamlit application lets a user upload a hotel folio statement (PDF),
sends it to an OpenAI model for structured extraction, and renders the
returned transactions as an interactive expense dashboard.

The app assumes that the user has installed the following Python
packages in their environment:

* streamlit: for building the web interface
* pandas: for data manipulation
* plotly: for the interactive charts
* pdfplumber: for checking uploaded PDFs before they are sent
* openai: for the extraction call

Usage: run this app with

    streamlit run folio_web_app.py
"""

import logging
import os

import streamlit as st

from dashboard import FolioDashboard
from extraction_service import analyze_statement, total_mismatch
from folio_types import Currency, ExtractionError, Language, UploadRejectedError
from pdf_intake import validate_upload
from settings import configure_logging, load_settings
from translations import get_translations

st.set_page_config(layout="wide", page_title="Hotel Statement Analyzer", page_icon="🏨")

logger = logging.getLogger(__name__)

RESULT_KEY = "analysis_result"
FILE_ID_KEY = "analysis_file_id"
ERROR_KEY = "upload_error"
UPLOADER_KEY = "uploader_nonce"


def reset_analysis() -> None:
    """Forget the current folio and every filter so a new file can be uploaded."""
    for key in (RESULT_KEY, FILE_ID_KEY, ERROR_KEY, "search_term", "category_filter",
                "start_date", "end_date", "_last_click_pie", "_last_click_bar"):
        st.session_state.pop(key, None)
    # A new uploader key drops the previously selected file
    st.session_state[UPLOADER_KEY] = st.session_state.get(UPLOADER_KEY, 0) + 1


def render_sidebar(settings):
    language = st.sidebar.radio(
        "🌐", options=list(Language), format_func=lambda lang: lang.value, horizontal=True, key="language"
    )
    t = get_translations(language)
    currency = st.sidebar.radio(
        f"💲 {t['currency']}", options=list(Currency), format_func=lambda c: c.value,
        horizontal=True, key="display_currency",
    )

    if not settings.openai_api_key:
        api_key = st.sidebar.text_input(t["apiKey"], type="password", key="api_key_input")
        if api_key:
            os.environ['OPENAI_API_KEY'] = api_key
            st.sidebar.success("✅")
    return language, currency


def render_upload(t, settings) -> None:
    st.subheader(t["uploadPrompt"])
    uploaded = st.file_uploader(
        t["uploadButton"],
        type=["pdf"],
        key=f"folio_upload_{st.session_state.get(UPLOADER_KEY, 0)}",
        help=t["maxSize"].format(max_mb=settings.max_upload_mb),
    )
    st.caption(t["maxSize"].format(max_mb=settings.max_upload_mb))

    col1, col2, col3 = st.columns(3)
    for col, step in zip((col1, col2, col3), ("stepExtract", "stepClean", "stepCategorize")):
        with col:
            st.markdown(f"**{t[step]}**")
            st.caption(t[f"{step}Detail"])

    if uploaded is None or uploaded.file_id == st.session_state.get(FILE_ID_KEY):
        return

    st.session_state[FILE_ID_KEY] = uploaded.file_id
    st.session_state.pop(ERROR_KEY, None)
    data = uploaded.getvalue()
    try:
        validate_upload(data, uploaded.type, settings.max_upload_bytes)
        with st.spinner(t["analyzing"]):
            st.caption(t["analyzingDetail"])
            result = analyze_statement(data, filename=uploaded.name, settings=settings)
    except UploadRejectedError as e:
        logger.info("Upload rejected: %s", e)
        st.session_state[ERROR_KEY] = e.message_key
    except ExtractionError:
        logger.exception("Folio extraction failed")
        st.session_state[ERROR_KEY] = "errorGeneric"
    except Exception:
        logger.exception("Unexpected failure while analyzing folio")
        st.session_state[ERROR_KEY] = "errorGeneric"
    else:
        st.session_state[RESULT_KEY] = result
    st.rerun()


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    language, currency = render_sidebar(settings)
    t = get_translations(language)
    st.title(f"🏨 {t['title']}")

    # Re-read after the sidebar may have supplied a key for this session
    settings = load_settings()

    error_key = st.session_state.get(ERROR_KEY)
    if error_key:
        st.error(f"**Error:** {t.get(error_key, t['errorGeneric'])}")

    result = st.session_state.get(RESULT_KEY)
    if result is None:
        render_upload(t, settings)
        return

    mismatch = total_mismatch(result, settings.total_tolerance)
    FolioDashboard(result, language, currency, t, mismatch=mismatch).render()

    st.divider()
    st.button(t["reset"], on_click=reset_analysis)


if __name__ == "__main__":
    main()
