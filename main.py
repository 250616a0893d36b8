# main.py
import json
import logging

import pandas as pd
import streamlit as st

from decl_parser import parse_declarations
from render import footnote_anchor_prefix, render_html, render_json, render_plain
from signature_composer import SignatureComposer
from type_graph import dot_for_signature, graphs_zip
from type_phraser import type_text

logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="Swift Declaration Explainer", layout="wide")
st.title("🕊️ Swift Function Declaration Explainer")

# ---------- Top instructions ----------
st.markdown(
    """
**How to use**

1. Upload a Swift file OR paste one or more function declarations in the sidebar.
2. Click **Explain Declarations** to translate them.
3. Explore results in the tabs: **Summaries**, **Footnotes**, **Type Graphs**, **Raw JSON**.
4. The **Guide** tab explains how each part of a declaration is read.
"""
)

SAMPLE = """@available(macOS 13.0, *) public func foo<T: Numeric>(name: T, values: Int..., age: Int = 30) async throws -> String?

func authenticateUser(method: (String) throws -> Bool) rethrows

func reduce<T>(_ initialResult: T, _ nextPartialResult: @escaping (T, Self.Output) -> T) -> Publishers.Reduce<Self, T>

private func getAs<T: AnyObject>(_ objectType: T.Type) -> T?

@main
func foo<T: Codable, R: Codable>(_ bar: inout [T]) -> R
"""

# ---------- Sidebar: input & process button ----------
st.sidebar.header("Input")
uploaded_file = st.sidebar.file_uploader("Upload a Swift file (.swift)", type=["swift"])
code_area = st.sidebar.text_area("Or paste Swift declarations here", value=SAMPLE, height=300)
show_footnotes = st.sidebar.checkbox("Show footnotes under each summary", value=True)
process_button = st.sidebar.button("▶ Explain Declarations")

# store code in session so user can edit without losing it
if "last_code" not in st.session_state:
    st.session_state["last_code"] = ""

if uploaded_file is not None:
    raw = uploaded_file.read()
    code_text = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
    st.session_state["last_code"] = code_text
elif code_area and code_area.strip():
    st.session_state["last_code"] = code_area

code = st.session_state.get("last_code", "").strip()

# Remember if user has clicked process at least once
if process_button:
    st.session_state["run_analysis"] = True

if "run_analysis" not in st.session_state:
    st.info("Press **Explain Declarations** in the sidebar to translate the provided code.")
    st.stop()

if not code:
    st.error("No code provided. Paste declarations in the sidebar or upload a .swift file.")
    st.stop()

with st.spinner("Reading declarations..."):
    signatures = parse_declarations(code)
    composer = SignatureComposer()
    translations = [composer.compose(sig) for sig in signatures]

if not signatures:
    st.info("No function declarations found.")
    st.stop()

# Overview table
df = pd.DataFrame(
    [
        {
            "function": sig.name,
            "inputs": len(sig.parameters),
            "returns": type_text(sig.return_type) if sig.return_type is not None else "-",
            "async": sig.is_async,
            "throws": sig.throw_kind.value,
            "generics": len(sig.generics),
            "footnotes": len(tr.footnotes),
            "summary": tr.text,
        }
        for sig, tr in zip(signatures, translations)
    ]
)

# ---------- Tabs ----------
tab_summary, tab_notes, tab_graph, tab_raw, tab_guide = st.tabs(
    ["📝 Summaries", "📎 Footnotes", "🔗 Type Graphs", "📦 Raw JSON", "📖 Guide"]
)

# ----- Summaries Tab -----
with tab_summary:
    st.header("Natural-language summaries")
    for idx, (sig, tr) in enumerate(zip(signatures, translations)):
        st.markdown(f"### {sig.name}()")
        if sig.source:
            st.code(sig.source, language="swift")
        if show_footnotes:
            st.markdown(render_html(tr, anchor_prefix=footnote_anchor_prefix(idx)), unsafe_allow_html=True)
        else:
            st.markdown(tr.text)

    with st.expander("Plain text"):
        st.text(render_plain(translations, include_footnotes=show_footnotes))

# ----- Footnotes Tab -----
with tab_notes:
    st.header("Footnotes")
    rows = [
        {"function": sig.name, "anchor": note.anchor_text, "explanation": note.text}
        for sig, tr in zip(signatures, translations)
        for note in tr.footnotes
    ]
    if rows:
        st.dataframe(pd.DataFrame(rows), width="stretch")
    else:
        st.info("No footnotes for these declarations.")

# ----- Type Graphs Tab -----
with tab_graph:
    st.header("Type structure")
    ncols = min(3, max(1, len(signatures)))
    cols = st.columns(ncols)
    for idx, sig in enumerate(signatures):
        with cols[idx % ncols]:
            st.markdown(f"**{sig.name}**")
            st.graphviz_chart(dot_for_signature(sig, name=sig.name))

    # --- Download all type graphs as ZIP ---
    # Generate ZIP only once per input, cache in session
    if st.session_state.get("graphs_zip_source") != code:
        st.session_state["graphs_zip"] = graphs_zip(signatures)
        st.session_state["graphs_zip_source"] = code

    st.download_button(
        "⬇️ Download All Type Graphs (ZIP)",
        st.session_state["graphs_zip"],
        file_name="type_graphs.zip",
        mime="application/zip",
        key="download_all_graphs",
    )

# ----- Raw JSON Tab -----
with tab_raw:
    st.header("Raw translations")
    st.dataframe(df, width="stretch")
    st.json(json.loads(render_json(translations)))

    st.markdown("**Downloads**")
    st.download_button(
        "Download summaries CSV",
        df.to_csv(index=False).encode("utf-8"),
        file_name="declaration_summaries.csv",
        mime="text/csv",
        key="summaries_csv_dl",
    )
    st.download_button(
        "Download full JSON",
        render_json(translations),
        file_name="declaration_summaries.json",
        mime="application/json",
        key="summaries_json_dl",
    )

# ----- Guide Tab -----
with tab_guide:
    st.header("How a declaration is read")

    st.markdown("""
    ### Effects and modifiers
    - `async` makes the function **asynchronous**; modifiers such as `public` or `static` are read as written.

    ### Inputs
    - Every parameter is read as **`name` of type ...**, using its local name.
    - A variadic parameter (`Int...`) becomes **an indefinite number of** values.
    - An `inout` parameter becomes **a non-constant** value the function may change.
    - Default values are read as **with default value of ...**.

    ### Output
    - `-> T?` is read as **`T` or `nil`**; no arrow means the function **returns no output**.
    - The footnote for the return type spells the type out in full, e.g. *array of dictionary mapping `String` to `Int`*.

    ### Generics
    - `<T: Codable>` is read as **`T` conforms to `Codable`**; `<T>` alone as **`T` can be any type**.

    ### Errors
    - `throws` adds **or throws an error**; `rethrows` adds **or throws an error if its input function throws an error**.

    ### Attributes
    - `@available(macOS 13.0, *)` adds **It is available on macOS 13.0**; `@objc(name)` adds **exposed to Objective-C**.
    - Argument-less attributes like `@main` or `@discardableResult` get a footnote explaining them.
    ---

    ⚠️ **Reminder:**
    Only function declarations are read. Bodies are skipped and types are described by their shape, not their meaning.
    """)

# ---------- End ----------
st.markdown("---")
st.markdown("Built with ❤️ — Swift made readable.")
