import logging
from typing import Any, Dict

import streamlit as st

from ui import client

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

SAMPLE_CODE = """def analyze_data(data):
    results = []
    for item in data:
        if item['status'] == 'active':
            results.append({
                'id': item['id'],
                'processed_at': str(datetime.now())
            })
    return results
"""


def render_summary(out: Dict[str, Any]) -> None:
    summary = out.get("summary", {})
    score = int(out.get("qualityScore", 0))
    st.metric("Quality score", f"{score}")
    st.progress(min(max(score, 0), 100) / 100)

    cols = st.columns(5)
    cols[0].metric("Issues", summary.get("totalIssues", 0))
    cols[1].metric("Errors", summary.get("errorCount", 0))
    cols[2].metric("Warnings", summary.get("warningCount", 0))
    cols[3].metric("Suggestions", summary.get("suggestionCount", 0))
    cols[4].metric("Optimizations", summary.get("optimizationCount", 0))


def render_issues(out: Dict[str, Any]) -> None:
    issues = out.get("issues", [])
    if not issues:
        st.success("No issues found.")
        return

    kinds = sorted({i.get("type", "") for i in issues})
    selected = st.multiselect("Filter", kinds, default=kinds)
    st.subheader("Issues & suggestions")
    for issue in issues:
        if issue.get("type") in selected:
            st.markdown(f"- {client.format_issue(issue)}")


def render_optimized(out: Dict[str, Any]) -> None:
    optimized = out.get("optimizedCode")
    if optimized:
        st.subheader("Optimized code")
        # st.code ships its own copy button
        st.code(optimized, language=out.get("language", "javascript"))


def render_export(out: Dict[str, Any]) -> None:
    st.subheader("Export")
    st.download_button(
        "Export as JSON",
        data=client.export_json(out),
        file_name=client.export_filename(),
        mime="application/json",
    )
    analysis_id = out.get("id")
    if analysis_id is not None:
        st.caption("Share link")
        st.code(client.share_url(analysis_id), language="text")


def render_result(out: Dict[str, Any]) -> None:
    render_summary(out)
    render_issues(out)
    render_optimized(out)
    render_export(out)


st.set_page_config(page_title="Code Review Assistant", layout="wide")
st.title("Code Review Assistant")
st.caption("Analyze, optimize, and improve your code")
st.caption("API: Connected" if client.api_healthy() else "API: Not reachable")

if client.apply_pending_action(st.session_state, SAMPLE_CODE) == "restore":
    st.toast("Restored your saved code")

col_left, col_right = st.columns([2, 1], gap="large")

with col_left:
    st.subheader("Code input")
    label = st.selectbox("Language", list(client.LANGUAGES), key="language_label")
    language = client.LANGUAGES[label]
    code_input = st.text_area("Paste your code", key="code", height=420)
    st.caption(client.code_stats(code_input))

    b1, b2, b3, b4 = st.columns(4)
    run_btn = b1.button("Analyze Code", type="primary", use_container_width=True)
    if b2.button("Save", use_container_width=True):
        st.session_state["saved"] = {"code": code_input, "language": language}
        st.toast("Your code has been saved for this session")
    if b3.button("Restore", disabled="saved" not in st.session_state, use_container_width=True):
        st.session_state["pending_action"] = "restore"
        st.rerun()
    if b4.button("Clear", use_container_width=True):
        st.session_state["pending_action"] = "clear"
        st.rerun()

    if run_btn:
        if not code_input.strip():
            st.warning("Please enter some code to analyze")
        else:
            with st.spinner("Analyzing code..."):
                try:
                    out = client.analyze(code_input, language)
                    out["language"] = language
                    st.session_state["result"] = out
                    st.toast(
                        f"Found {out['summary']['totalIssues']} issues with a quality score of {out['qualityScore']}%"
                    )
                except client.ApiError as exc:
                    logger.warning("Analysis failed: %s", exc.message)
                    st.error(exc.message or "Failed to analyze code. Please try again.")
                except Exception as exc:
                    logger.warning("API not reachable: %s", exc)
                    st.error(f"Failed to analyze code: {exc}")

with col_right:
    st.subheader("Analysis results")
    result = st.session_state.get("result")
    if result:
        render_result(result)
    else:
        st.info("Run an analysis to see results here.")

st.markdown("---")
with st.expander("Open a shared analysis"):
    shared_id = st.number_input("Analysis id", min_value=1, step=1, value=1)
    if st.button("Load"):
        try:
            stored = client.fetch_analysis(int(shared_id))
        except Exception as exc:
            stored = None
            st.error(f"Failed to load analysis: {exc}")
        if stored is None:
            st.warning("Analysis not found")
        else:
            st.code(stored.get("code", ""), language=stored.get("language", "text"))
            render_result(stored)

with st.expander("Recent analyses"):
    try:
        for item in client.fetch_recent(limit=10):
            st.markdown(
                f"- #{item['id']} · {item['language']} · score {item['qualityScore']} · {item['createdAt']}"
            )
    except Exception as exc:
        st.caption(f"Recent analyses unavailable: {exc}")
